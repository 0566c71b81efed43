from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .lib.env import PATHS

logger = logging.getLogger(__name__)

DEFAULT_SHELL_CONFIG_HINT = "your shell configuration file (e.g., ~/.zprofile, ~/.zshrc)"


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"config key {key!r} must be true or false, got {value!r}")


@dataclass(frozen=True)
class BootstrapConfig:
    raw: Dict[str, Any] = field(default_factory=dict)
    source: Optional[str] = None

    @property
    def log_path(self) -> str:
        return os.path.expanduser(str(self.raw.get("log_path") or PATHS.log_default))

    @property
    def manifest_path(self) -> Optional[str]:
        p = self.raw.get("manifest_path")
        return os.path.expanduser(str(p)) if p else None

    @property
    def prerequisite_failure_fatal(self) -> bool:
        return _as_bool(self.raw.get("prerequisite_failure_fatal", False), "prerequisite_failure_fatal")

    @property
    def require_network(self) -> bool:
        return _as_bool(self.raw.get("require_network", True), "require_network")

    @property
    def network_host(self) -> str:
        return str(self.raw.get("network_host") or "google.com")

    @property
    def cache_sudo(self) -> bool:
        return _as_bool(self.raw.get("cache_sudo", True), "cache_sudo")

    @property
    def shell_config_hint(self) -> str:
        return str(self.raw.get("shell_config_hint") or DEFAULT_SHELL_CONFIG_HINT)


def load_bootstrap_config(path: str) -> BootstrapConfig:
    """Load the optional YAML config. A missing file yields the defaults."""

    p = Path(os.path.expanduser(path))
    if not p.exists():
        logger.info("No config at %s; using defaults", p)
        return BootstrapConfig()

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError(f"config must be YAML: {p}")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read config {p}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"config is not valid YAML: {p}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"config must contain a mapping/object: {p}")

    logger.info("Loaded config %s (keys=%s)", p, ",".join(sorted(raw)))
    return BootstrapConfig(raw=raw, source=str(p))
