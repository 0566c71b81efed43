from __future__ import annotations

import logging
import platform

from .command import run_cmd

logger = logging.getLogger(__name__)

ADMIN_GROUP = "admin"


def is_macos() -> bool:
    system = platform.system()
    logger.info("Platform: %s", system)
    return system == "Darwin"


def user_groups() -> list[str]:
    r = run_cmd(["id", "-G", "-n"], check=False)
    if not r.ok:
        return []
    return r.stdout.split()


def in_admin_group() -> bool:
    groups = user_groups()
    logger.info("Groups: %s", ",".join(groups))
    return ADMIN_GROUP in groups


def cache_sudo_credentials() -> bool:
    """Prompt for the sudo password once so later installs do not stall."""

    return run_cmd(["sudo", "-v"], check=False, capture=False).ok
