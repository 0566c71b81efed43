from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Paths:
    config_default: str = "~/.config/dotfiles-bootstrap/config.yaml"
    config_env_var: str = "DOTFILES_BOOTSTRAP_CONFIG"
    log_default: str = "~/Library/Logs/dotfiles-bootstrap.log"
    # Apple Silicon first, then Intel.
    homebrew_prefixes: Tuple[str, ...] = field(default=("/opt/homebrew", "/usr/local"))
    homebrew_prefix_fallback: str = "/opt/homebrew"


PATHS = Paths()


def config_path_from_env() -> str:
    return os.environ.get(PATHS.config_env_var) or PATHS.config_default
