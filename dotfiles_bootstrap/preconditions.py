from __future__ import annotations

import logging
from typing import Callable

from .config import BootstrapConfig
from .errors import PreconditionFailure
from .lib import host, net

logger = logging.getLogger(__name__)

Check = Callable[[], bool]


def check_preconditions(
    cfg: BootstrapConfig,
    *,
    is_macos: Check = host.is_macos,
    in_admin_group: Check = host.in_admin_group,
    is_online: Callable[[str], bool] = net.is_online,
    cache_sudo: Check = host.cache_sudo_credentials,
) -> None:
    """Abort the run before any package is processed if the host is unsuitable."""

    if not is_macos():
        raise PreconditionFailure("This script requires macOS (Darwin).")

    if not in_admin_group():
        raise PreconditionFailure("This script requires the user to be in the admin group.")

    if cfg.require_network and not is_online(cfg.network_host):
        raise PreconditionFailure("No internet connection detected; required for package installs.")

    if cfg.cache_sudo and not cache_sudo():
        raise PreconditionFailure("Could not obtain sudo credentials.")

    logger.info("Preconditions passed")
