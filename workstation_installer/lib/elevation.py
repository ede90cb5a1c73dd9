from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import Sequence

from .command import CommandError, CommandRunner, powershell

logger = logging.getLogger(__name__)


def is_elevated(runner: CommandRunner) -> bool:
    """Probe for admin rights: `net session` only succeeds when elevated."""

    try:
        runner.run(["net", "session"])
        return True
    except CommandError:
        return False


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def relaunch_argv(args: Sequence[str] | None = None, *, cwd: str | None = None) -> list[str]:
    """Interpreter + module invocation that reproduces the current run.

    RunAs children start in System32, so the current directory travels along
    as --workdir and relative --config/--log/--summary paths keep working.
    """

    rest = list(sys.argv[1:] if args is None else args)
    if "--workdir" not in rest:
        rest += ["--workdir", cwd or os.getcwd()]
    return [sys.executable, "-m", "workstation_installer", *rest]


def relaunch_elevated(runner: CommandRunner, argv: Sequence[str]) -> None:
    """Ask Windows to start argv again with the RunAs verb (UAC prompt)."""

    exe, *rest = list(argv)
    script = f"Start-Process -FilePath {_ps_quote(exe)}"
    if rest:
        # One pre-quoted command line; Start-Process does not quote list items.
        script += " -ArgumentList " + _ps_quote(subprocess.list2cmdline(rest))
    script += " -Verb RunAs"
    runner.run(powershell(script))
