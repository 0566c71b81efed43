"""Pytest configuration shared across the test suite."""

from __future__ import annotations

import pathlib
import stat
import sys
from typing import Callable, Dict, Iterable, List, Optional, Sequence

import pytest

# Ensure repo root is on sys.path so tests can import the local package.
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from dotfiles_bootstrap.orchestrator import Orchestrator  # noqa: E402
from dotfiles_bootstrap.packages import PackageRequest, requires_available  # noqa: E402


class FakeHost:
    """Stands in for PATH lookups and installers.

    ``installed`` holds detect commands that probes find. ``provides`` maps a
    space-joined install action to the detect command it puts in place. Actions
    listed in ``fail`` report failure; any other action succeeds.
    """

    def __init__(self, installed: Iterable[str] = ()) -> None:
        self.installed = set(installed)
        self.provides: Dict[str, Optional[str]] = {}
        self.fail: set[str] = set()
        self.ran: List[List[str]] = []
        self.probes: List[str] = []
        self.out: List[str] = []
        self.err: List[str] = []

    def probe(self, detect_command, extra_paths=(), *, package_name=None, echo=print) -> bool:
        self.probes.append(detect_command)
        if detect_command in self.installed:
            echo(f"{package_name or detect_command} is already installed.")
            return True
        return False

    def runner(self, argv: Sequence[str]) -> bool:
        argv = list(argv)
        self.ran.append(argv)
        key = " ".join(argv)
        if key in self.fail:
            return False
        provided = self.provides.get(key)
        if provided:
            self.installed.add(provided)
        return True

    def orchestrator(self, answers: Iterable[bool] = (), **kwargs) -> Orchestrator:
        replies = iter(answers)
        self.questions: List[str] = []

        def confirm(question: str) -> bool:
            self.questions.append(question)
            return next(replies)

        return Orchestrator(
            prober=self.probe,
            confirm=confirm,
            runner=self.runner,
            echo=self.out.append,
            echo_err=self.err.append,
            **kwargs,
        )


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def manager_request() -> PackageRequest:
    return PackageRequest(
        name="Homebrew",
        detect_command="brew",
        install_action=("install-brew",),
        extra_search_paths=("/opt/homebrew/bin", "/usr/local/bin"),
        manager=True,
    )


@pytest.fixture
def dependent_request() -> PackageRequest:
    return PackageRequest(
        name="GnuPG",
        detect_command="gpg",
        install_action=("brew", "install", "gnupg"),
        prerequisite=requires_available("Homebrew"),
        prerequisite_failure_message="GnuPG requires Homebrew to be installed.",
        requires=("Homebrew",),
    )


@pytest.fixture
def scripted_input() -> Callable[[Iterable[str]], Callable[[str], str]]:
    """Factory for an ``input`` replacement that replays answers and records prompts."""

    def _factory(answers: Iterable[str]):
        replies = iter(answers)

        def _input(prompt: str) -> str:
            _input.prompts.append(prompt)
            return next(replies)

        _input.prompts = []
        return _input

    return _factory


@pytest.fixture
def make_executable(tmp_path: pathlib.Path) -> Callable[[str, str], pathlib.Path]:
    """Create an executable file ``<tmp>/<dir>/<name>`` and return its directory."""

    def _factory(dirname: str, name: str) -> pathlib.Path:
        d = tmp_path / dirname
        d.mkdir(parents=True, exist_ok=True)
        exe = d / name
        exe.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        exe.chmod(exe.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return d

    return _factory


@pytest.fixture
def empty_path(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """PATH containing only an empty directory."""

    d = tmp_path / "empty-bin"
    d.mkdir()
    monkeypatch.setenv("PATH", str(d))
    return str(d)
