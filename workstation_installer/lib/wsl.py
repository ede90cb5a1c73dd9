from __future__ import annotations

import logging

from .choco import choco_install
from .command import CommandRunner

logger = logging.getLogger(__name__)

# wsl.exe prints UTF-16 unless told otherwise.
WSL_ENV = {"WSL_UTF8": "1"}


def wsl_list(runner: CommandRunner) -> str:
    out = runner.run(["wsl", "--list"], env=WSL_ENV)
    return out.replace("\x00", "")


def wsl_install(runner: CommandRunner) -> None:
    choco_install(runner, "wsl")


def wsl_update(runner: CommandRunner) -> None:
    runner.run(["wsl", "--update"], env=WSL_ENV)


def wsl_set_default(runner: CommandRunner, distribution: str) -> None:
    runner.run(["wsl", "--set-default", distribution], env=WSL_ENV)
