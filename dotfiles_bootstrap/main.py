from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, List, Optional, Sequence

from . import __version__
from .config import BootstrapConfig, load_bootstrap_config
from .errors import BootstrapError, ConfigError, ManifestError
from .lib.env import config_path_from_env
from .lib.manifests import load_package_requests
from .logging_utils import configure_logging
from .orchestrator import Orchestrator
from .packages import InstallOutcome, Ledger, PackageRequest
from .preconditions import check_preconditions
from .shellenv import activate_manager, summary_lines

logger = logging.getLogger(__name__)

EchoFunc = Callable[[str], None]


def _stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def run(
    cfg: BootstrapConfig,
    *,
    requests: Optional[Sequence[PackageRequest]] = None,
    orchestrator: Optional[Orchestrator] = None,
    preconditions: Callable[[BootstrapConfig], None] = check_preconditions,
    activate: Callable[[PackageRequest, InstallOutcome], object] = activate_manager,
    summarize: Callable[..., List[str]] = summary_lines,
    echo: EchoFunc = print,
) -> Ledger:
    """Check the host, bring every package to a known state, print follow-ups."""

    preconditions(cfg)

    if requests is None:
        requests = load_package_requests(cfg.manifest_path)

    if orchestrator is None:
        orchestrator = Orchestrator(prerequisite_failure_fatal=cfg.prerequisite_failure_fatal)

    def _after_each(request: PackageRequest, outcome: InstallOutcome) -> None:
        if request.manager:
            activate(request, outcome)

    ledger = orchestrator.install_all(requests, after_each=_after_each)
    logger.info("Run finished: %r", ledger)

    for line in summarize(ledger, requests, hint=cfg.shell_config_hint):
        echo(line)
    return ledger


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dotfiles-bootstrap",
        description=(
            "Ensure the dotfiles prerequisites (Homebrew, GnuPG) are installed, "
            "prompting before each install."
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    build_parser().parse_args(argv)

    try:
        cfg = load_bootstrap_config(config_path_from_env())
    except ConfigError as e:
        # Logging is not configured yet; the config decides where it goes.
        _stderr(f"Error: {e}")
        return 1

    configure_logging(log_path=cfg.log_path, also_console=False)

    try:
        run(cfg)
    except (BootstrapError, ConfigError, ManifestError) as e:
        # ConfigError here means a key with the wrong type, read lazily.
        logger.exception("Bootstrap failed")
        _stderr(f"Error: {e}")
        return 1
    except EOFError:
        logger.error("Standard input closed while waiting for an answer")
        _stderr("Error: standard input closed before all questions were answered.")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by operator")
        _stderr("\nInterrupted.")
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
