from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..errors import ManifestError
from ..packages import PackageRequest, requires_available

logger = logging.getLogger(__name__)


def _package_root() -> Path:
    # dotfiles_bootstrap/lib/manifests.py -> dotfiles_bootstrap
    return Path(__file__).resolve().parents[1]


def default_manifest_path() -> Path:
    return _package_root() / "manifests" / "packages.yaml"


def load_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"cannot read manifest {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ManifestError(f"manifest is not valid YAML: {path}") from e
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest must be a mapping/dict: {path}")
    return data


def _flag(entry: Dict[str, Any], key: str, name: str) -> bool:
    value = entry.get(key, False)
    if not isinstance(value, bool):
        raise ManifestError(f"{name}: {key} must be true or false, got {value!r}")
    return value


def _str_list(entry: Dict[str, Any], key: str, name: str) -> List[str]:
    value = entry.get(key) or []
    if not isinstance(value, list):
        raise ManifestError(f"{name}: {key} must be a list")
    return [str(v) for v in value]


def build_requests(entries: List[Any]) -> List[PackageRequest]:
    """Turn manifest entries into requests, binding prerequisites as predicates.

    A package may only require packages registered before it, so every
    prerequisite reads an outcome that is already final when it is evaluated.
    """

    requests: List[PackageRequest] = []
    seen: List[str] = []

    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ManifestError(f"package #{i + 1} must be a mapping")

        name = str(entry.get("name") or "").strip()
        detect = str(entry.get("detect") or "").strip()
        if not name:
            raise ManifestError(f"package #{i + 1} has no name")
        if not detect:
            raise ManifestError(f"{name}: detect command missing")
        if name in seen:
            raise ManifestError(f"{name}: listed twice")

        install = _str_list(entry, "install", name)
        if not install:
            raise ManifestError(f"{name}: install action missing")

        requires = _str_list(entry, "requires", name)
        for dep in requires:
            if dep not in seen:
                raise ManifestError(f"{name}: requires {dep}, which must be listed before it")

        requests.append(
            PackageRequest(
                name=name,
                detect_command=detect,
                install_action=tuple(install),
                prerequisite=requires_available(*requires) if requires else None,
                prerequisite_failure_message=str(
                    entry.get("prerequisite_message") or f"{name} requires {', '.join(requires)}."
                )
                if requires
                else "",
                extra_search_paths=tuple(_str_list(entry, "search_paths", name)),
                manager=_flag(entry, "manager", name),
                requires=tuple(requires),
            )
        )
        seen.append(name)

    return requests


def load_package_requests(path: Optional[str] = None) -> List[PackageRequest]:
    p = Path(path) if path else default_manifest_path()
    data = load_yaml(p)
    entries = data.get("packages")
    if not isinstance(entries, list) or not entries:
        raise ManifestError(f"{p}: packages must be a non-empty list")

    requests = build_requests(entries)
    logger.info("Loaded %d packages from %s: %s", len(requests), p, ",".join(r.name for r in requests))
    return requests
