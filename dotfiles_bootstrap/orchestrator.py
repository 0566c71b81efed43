from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from .errors import InstallActionFailure, PostInstallVerificationFailure, PrerequisiteUnmet
from .lib.command import run_install_action
from .lib.probe import probe
from .lib.prompt import ask
from .packages import InstallOutcome, Ledger, PackageRequest

logger = logging.getLogger(__name__)

ProbeFunc = Callable[..., bool]
ConfirmFunc = Callable[[str], bool]
RunnerFunc = Callable[[Sequence[str]], bool]
EchoFunc = Callable[[str], None]


def _stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def _confirm_default_yes(question: str) -> bool:
    return ask(question, default="yes")


@dataclass
class Orchestrator:
    """Brings packages to a known state one at a time, recording each outcome.

    Collaborators are injectable so the state machine can run without a
    terminal, a real PATH, or real installers.
    """

    ledger: Ledger = field(default_factory=Ledger)
    prober: ProbeFunc = probe
    confirm: ConfirmFunc = _confirm_default_yes
    runner: RunnerFunc = run_install_action
    echo: EchoFunc = print
    echo_err: EchoFunc = _stderr
    prerequisite_failure_fatal: bool = False

    def _probe(self, request: PackageRequest, *, notify: bool = True) -> bool:
        return self.prober(
            request.detect_command,
            request.extra_search_paths,
            package_name=request.name,
            echo=self.echo if notify else (lambda _msg: None),
        )

    def _prerequisite_met(self, request: PackageRequest) -> bool:
        if request.prerequisite is None:
            return True
        met = bool(request.prerequisite(self.ledger))
        logger.info("Prerequisite for %s: %s", request.name, "met" if met else "unmet")
        return met

    def _finish(self, request: PackageRequest, outcome: InstallOutcome) -> InstallOutcome:
        self.ledger.record(request.name, outcome)
        logger.info("Outcome %s: %s", request.name, outcome.value)
        return outcome

    def install(self, request: PackageRequest) -> InstallOutcome:
        """Process one request. Raises a BootstrapError on fatal failures."""

        existing = self.ledger.get(request.name)
        if existing is not None:
            # Outcomes are final; a repeat call only re-reports presence.
            logger.info("%s already processed (%s)", request.name, existing.value)
            if existing.available:
                self._probe(request)
            return existing

        if self._probe(request):
            return self._finish(request, InstallOutcome.ALREADY_PRESENT)

        if not self._prerequisite_met(request):
            logger.warning("%s blocked by unmet prerequisite", request.name)
            if self.prerequisite_failure_fatal:
                raise PrerequisiteUnmet(request.name, request.prerequisite_failure_message)
            self.echo_err(request.prerequisite_failure_message)
            return self._finish(request, InstallOutcome.SKIPPED)

        self.echo(f"{request.name} not found.")
        if not self.confirm(f"Do you want to install {request.name}?"):
            self.echo(f"{request.name} installation skipped.")
            return self._finish(request, InstallOutcome.SKIPPED)

        self.echo(f"Installing {request.name}...")
        if not self.runner(request.install_action):
            raise InstallActionFailure(request.name)
        self.echo(f"{request.name} installed successfully.")

        if not self._probe(request, notify=False):
            raise PostInstallVerificationFailure(request.name, request.detect_command)

        return self._finish(request, InstallOutcome.NEWLY_INSTALLED)

    def install_all(
        self,
        requests: Sequence[PackageRequest],
        *,
        after_each: Optional[Callable[[PackageRequest, InstallOutcome], None]] = None,
    ) -> Ledger:
        """Process requests in registration order; the first fatal error stops the run."""

        for request in requests:
            logger.info("Processing %s", request.name)
            outcome = self.install(request)
            if after_each is not None:
                after_each(request, outcome)
        return self.ledger
