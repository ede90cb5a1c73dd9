from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


class CommandError(RuntimeError):
    """An external command failed (non-zero exit, stderr in strict mode, or timeout)."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip()
        msg = f"Command failed ({returncode}): {fmt_argv(self.argv)}"
        if detail:
            msg += f"\n{detail}"
        super().__init__(msg)


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    dry_run: bool = False,
    timeout_s: float | None = None,
    fail_on_stderr: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - Captures stdout/stderr so callers can search listing output.
    - dry_run logs but does not execute.
    - No timeout unless timeout_s is given; a hung command blocks the caller.
    """

    argv_list = list(argv)
    logger.info("Running command: %s", fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            errors="replace",
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
            timeout=timeout_s,
        )
    except subprocess.TimeoutExpired as e:
        raise CommandError(argv_list, -1, f"timed out after {timeout_s}s") from e
    except OSError as e:
        # Executable missing or not runnable.
        raise CommandError(argv_list, -1, str(e)) from e

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    if check and (p.returncode != 0 or (fail_on_stderr and p.stderr.strip())):
        raise CommandError(argv_list, p.returncode, p.stderr)

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)


class CommandRunner(Protocol):
    """Run one external command and return its stdout, or raise CommandError."""

    def run(self, argv: Sequence[str], *, env: Optional[Mapping[str, str]] = None) -> str:
        ...


@dataclass(frozen=True)
class SubprocessRunner:
    dry_run: bool = False
    timeout_s: Optional[float] = None
    fail_on_stderr: bool = False

    def run(self, argv: Sequence[str], *, env: Optional[Mapping[str, str]] = None) -> str:
        r = run_cmd(
            argv,
            env=env,
            dry_run=self.dry_run,
            timeout_s=self.timeout_s,
            fail_on_stderr=self.fail_on_stderr,
        )
        return r.stdout


def powershell(command: str) -> list[str]:
    return ["powershell", "-NoProfile", "-ExecutionPolicy", "Bypass", "-Command", command]
