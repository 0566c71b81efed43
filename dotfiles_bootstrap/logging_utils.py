from __future__ import annotations

import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging.

    All decisions are recorded to the log file. If the requested location is
    not writable we fall back to the working directory, then the temp
    directory. If none is writable, only the console handler is installed.

    The console handler writes to stderr at WARNING and above; stdout belongs
    to the operator prompts.

    Returns the actual file path being used, or "" when there is none.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_dotfiles_bootstrap_configured", False):
        return getattr(logger, "_dotfiles_bootstrap_log_path", log_path)

    requested = os.path.expanduser(log_path)
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    candidates = [
        requested,
        str(Path.cwd() / "dotfiles-bootstrap.log"),
        str(Path(tempfile.gettempdir()) / "dotfiles-bootstrap.log"),
    ]
    chosen_path = ""
    for candidate in candidates:
        try:
            Path(os.path.dirname(candidate) or ".").mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(candidate)
        except OSError:
            continue
        chosen_path = candidate
        break

    if file_handler is not None:
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)
    else:
        also_console = True

    if also_console:
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_dotfiles_bootstrap_configured", True)
    setattr(logger, "_dotfiles_bootstrap_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", requested, chosen_path
    )
    return chosen_path
