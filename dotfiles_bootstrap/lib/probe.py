from __future__ import annotations

import contextlib
import logging
import os
import shutil
from typing import Callable, Iterator, Optional, Sequence

logger = logging.getLogger(__name__)

EchoFunc = Callable[[str], None]
WhichFunc = Callable[[str], Optional[str]]


@contextlib.contextmanager
def widened_search_path(extra_paths: Sequence[str]) -> Iterator[str]:
    """Prepend ``extra_paths`` to PATH for the duration of the block.

    The original PATH is restored on exit, including when the block raises.
    """

    original = os.environ.get("PATH")
    dirs = [d for d in extra_paths if d]
    widened = os.pathsep.join([*dirs, original] if original else dirs)
    os.environ["PATH"] = widened
    logger.debug("PATH widened with %s", ":".join(dirs))
    try:
        yield widened
    finally:
        if original is None:
            os.environ.pop("PATH", None)
        else:
            os.environ["PATH"] = original


def probe(
    detect_command: str,
    extra_paths: Sequence[str] = (),
    *,
    package_name: str | None = None,
    which: WhichFunc = shutil.which,
    echo: EchoFunc = print,
) -> bool:
    """Return True if ``detect_command`` is on PATH, or on PATH + ``extra_paths``."""

    display = package_name or detect_command

    found = which(detect_command)
    if not found and extra_paths:
        with widened_search_path(extra_paths):
            found = which(detect_command)
        if found:
            logger.info("%s found outside PATH at %s", detect_command, found)

    if found:
        logger.info("Probe %s: present (%s)", detect_command, found)
        echo(f"{display} is already installed.")
        return True

    logger.info("Probe %s: absent", detect_command)
    return False
