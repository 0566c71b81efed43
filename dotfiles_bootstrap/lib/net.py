from __future__ import annotations

import logging

from .command import run_cmd

logger = logging.getLogger(__name__)


def is_online(host: str = "google.com") -> bool:
    """Best-effort online check: one ping with a two second wait."""

    try:
        r = run_cmd(["ping", "-c", "1", "-W", "2", host], check=False)
    except Exception:
        logger.exception("Online check failed")
        return False
    logger.info("Online check (%s): %s", host, r.ok)
    return r.ok
