from __future__ import annotations

import logging

from ..packages import PackageRequest
from .command import CommandRunner

logger = logging.getLogger(__name__)

CHOCO = "choco"


def choco_upgrade_self(runner: CommandRunner) -> None:
    runner.run([CHOCO, "upgrade", "chocolatey", "-y"])


def choco_list_local(runner: CommandRunner, name: str) -> str:
    return runner.run([CHOCO, "list", "--local-only", name])


def choco_has_package(runner: CommandRunner, name: str) -> bool:
    """Return True if the local listing mentions the package identifier.

    Raises CommandError when the listing query itself fails; callers decide
    how to treat that.
    """
    out = choco_list_local(runner, name)
    return name.lower() in out.lower()


def choco_upgrade(runner: CommandRunner, package: PackageRequest) -> None:
    # `upgrade` installs when absent. Checksums are skipped on purpose: local
    # package metadata is trusted over remote checksum matching.
    runner.run([CHOCO, "upgrade", package.name, "-y", "--ignore-checksums", *package.manager_flags()])


def choco_install(runner: CommandRunner, name: str) -> None:
    runner.run([CHOCO, "install", name, "-y"])


def choco_clean(runner: CommandRunner) -> None:
    runner.run([CHOCO, "clean"])
