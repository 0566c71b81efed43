from __future__ import annotations

import enum
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional, Tuple


class InstallOutcome(enum.Enum):
    ALREADY_PRESENT = "already_present"
    NEWLY_INSTALLED = "newly_installed"
    SKIPPED = "skipped"

    @property
    def available(self) -> bool:
        return self in (InstallOutcome.ALREADY_PRESENT, InstallOutcome.NEWLY_INSTALLED)


class Ledger:
    """Append-only record of package outcomes for one run, in processing order."""

    def __init__(self) -> None:
        self._outcomes: "OrderedDict[str, InstallOutcome]" = OrderedDict()

    def record(self, name: str, outcome: InstallOutcome) -> None:
        if name in self._outcomes:
            raise ValueError(f"outcome for {name} already recorded as {self._outcomes[name].value}")
        self._outcomes[name] = outcome

    def outcome(self, name: str) -> InstallOutcome:
        try:
            return self._outcomes[name]
        except KeyError:
            raise KeyError(f"no outcome recorded for {name}") from None

    def get(self, name: str) -> Optional[InstallOutcome]:
        return self._outcomes.get(name)

    def newly_installed(self) -> list[str]:
        return [n for n, o in self._outcomes.items() if o is InstallOutcome.NEWLY_INSTALLED]

    def as_dict(self) -> Dict[str, InstallOutcome]:
        return dict(self._outcomes)

    def __contains__(self, name: object) -> bool:
        return name in self._outcomes

    def __iter__(self) -> Iterator[str]:
        return iter(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)

    def __repr__(self) -> str:
        body = ", ".join(f"{n}={o.value}" for n, o in self._outcomes.items())
        return f"Ledger({body})"


Prerequisite = Callable[[Ledger], bool]


def requires_available(*names: str) -> Prerequisite:
    """Prerequisite met when every named package is already present or newly installed."""

    required = tuple(names)

    def _check(ledger: Ledger) -> bool:
        return all(ledger.outcome(n).available for n in required)

    return _check


@dataclass(frozen=True)
class PackageRequest:
    name: str
    detect_command: str
    install_action: Tuple[str, ...]
    prerequisite: Optional[Prerequisite] = None
    prerequisite_failure_message: str = ""
    extra_search_paths: Tuple[str, ...] = ()
    manager: bool = False
    requires: Tuple[str, ...] = field(default=())
