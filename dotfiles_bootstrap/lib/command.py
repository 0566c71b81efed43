from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    capture: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - capture=False leaves stdin/stdout/stderr attached to the terminal, which
      interactive installers (sudo password, "Press RETURN") need.
    - A command that cannot be started at all is reported as returncode 127.
    """

    argv_list = list(argv)
    logger.info("CMD %s", fmt_argv(argv_list))

    try:
        if capture:
            p = subprocess.run(
                argv_list,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=cwd,
                env=dict(os.environ, **(env or {})),
            )
        else:
            p = subprocess.run(
                argv_list,
                cwd=cwd,
                env=dict(os.environ, **(env or {})),
            )
    except OSError as e:
        logger.warning("Could not start %s: %s", argv_list[0] if argv_list else "<empty>", e)
        if check:
            raise RuntimeError(f"Command could not be started: {fmt_argv(argv_list)}") from e
        return CmdResult(argv=argv_list, returncode=127, stdout="", stderr=str(e))

    stdout = p.stdout or ""
    stderr = p.stderr or ""
    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    if check and p.returncode != 0:
        raise RuntimeError(f"Command failed ({p.returncode}): {fmt_argv(argv_list)}\n{stderr}")

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)


def run_install_action(argv: Sequence[str]) -> bool:
    """Run an install action attached to the terminal; True on exit status 0."""

    r = run_cmd(argv, check=False, capture=False)
    if not r.ok:
        logger.error("Install action exited with %s: %s", r.returncode, fmt_argv(r.argv))
    return r.ok
