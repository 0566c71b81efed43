"""Manager environment: PATH activation during the run and the closing summary.

Activation only touches this process's environment. Making the manager
available to future shells is left to the operator, who gets the exact line to
add to their shell configuration.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .lib.command import run_cmd
from .lib.env import PATHS
from .packages import InstallOutcome, Ledger, PackageRequest

logger = logging.getLogger(__name__)

EchoFunc = Callable[[str], None]
WhichFunc = Callable[[str], Optional[str]]


def _stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def _is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def find_prefix(command: str, bin_dirs: Iterable[str]) -> Optional[str]:
    """Return the install prefix (parent of the bin dir) that holds ``command``."""

    for d in bin_dirs:
        if _is_executable(os.path.join(d, command)):
            return os.path.dirname(os.path.normpath(d))
    return None


def activate_manager(
    request: PackageRequest,
    outcome: InstallOutcome,
    *,
    which: WhichFunc = shutil.which,
    echo_err: EchoFunc = _stderr,
) -> Optional[str]:
    """Put the manager's bin dirs on PATH for the rest of this run.

    Returns the prefix that was activated, or None when nothing changed.
    """

    if not request.manager or not outcome.available:
        return None
    if outcome is InstallOutcome.ALREADY_PRESENT and which(request.detect_command):
        return None

    bin_dirs = list(request.extra_search_paths) or [os.path.join(p, "bin") for p in PATHS.homebrew_prefixes]
    prefix = find_prefix(request.detect_command, bin_dirs)
    if prefix is None:
        echo_err(f"Warning: {request.detect_command} command found, but shellenv setup failed.")
        return None

    current = os.environ.get("PATH", "")
    head = [os.path.join(prefix, "bin"), os.path.join(prefix, "sbin")]
    rest = [d for d in current.split(os.pathsep) if d and d not in head]
    os.environ["PATH"] = os.pathsep.join([*head, *rest])
    for key, value in shellenv_exports(prefix).items():
        os.environ[key] = value
    logger.info("Activated %s from %s for this run", request.name, prefix)
    return prefix


def shellenv_exports(prefix: str) -> Dict[str, str]:
    """The variables `brew shellenv` exports besides PATH, for one prefix.

    Intel installs keep the repository in <prefix>/Homebrew; Apple Silicon
    installs use the prefix itself.
    """

    repository = os.path.join(prefix, "Homebrew")
    if not os.path.isdir(repository):
        repository = prefix

    exports = {
        "HOMEBREW_PREFIX": prefix,
        "HOMEBREW_CELLAR": os.path.join(prefix, "Cellar"),
        "HOMEBREW_REPOSITORY": repository,
    }
    # A trailing separator keeps the system man and info paths searched.
    for key, sub in (("MANPATH", "share/man"), ("INFOPATH", "share/info")):
        head = os.path.join(prefix, sub)
        rest = [d for d in os.environ.get(key, "").split(os.pathsep) if d and d != head]
        exports[key] = os.pathsep.join([head, *rest]) + os.pathsep
    return exports


def manager_prefix(command: str = "brew") -> str:
    r = run_cmd([command, "--prefix"], check=False)
    prefix = r.stdout.strip() if r.ok else ""
    return prefix or PATHS.homebrew_prefix_fallback


def shellenv_line(prefix: str, command: str = "brew") -> str:
    return f'eval "$({prefix}/bin/{command} shellenv)"'


def _join_names(names: Sequence[str]) -> str:
    if len(names) <= 1:
        return "".join(names)
    return ", ".join(names[:-1]) + " and " + names[-1]


def summary_lines(
    ledger: Ledger,
    requests: Sequence[PackageRequest],
    *,
    prefix_of: Callable[[str], str] = manager_prefix,
    hint: str,
) -> List[str]:
    """Shell configuration instructions for managers installed during this run."""

    lines: List[str] = []
    for manager in (r for r in requests if r.manager):
        if ledger.get(manager.name) is not InstallOutcome.NEWLY_INSTALLED:
            continue
        dependents = [
            r.name
            for r in requests
            if manager.name in r.requires and ledger.get(r.name) is InstallOutcome.NEWLY_INSTALLED
        ]
        names = _join_names([manager.name, *dependents])
        prefix = prefix_of(manager.detect_command)
        lines.append(f"To make {names} available in future sessions, add the following to {hint}:")
        lines.append(f"  {shellenv_line(prefix, manager.detect_command)}")
    return lines
