from __future__ import annotations

import logging

from .choco import choco_install
from .command import CommandRunner, powershell

logger = logging.getLogger(__name__)

WINDOWS_UPDATE = "windows_update"
DRIVER_BOOSTER = "driver_booster"
DRIVER_METHODS = (WINDOWS_UPDATE, DRIVER_BOOSTER)


def update_via_windows_update(runner: CommandRunner) -> None:
    # Requires the PSWindowsUpdate module on the host.
    runner.run(powershell("Install-WindowsUpdate -AcceptAll -IgnoreReboot"))


def update_via_driver_booster(runner: CommandRunner) -> None:
    choco_install(runner, "driverbooster")
    runner.run(["driverbooster", "update"])


def update_drivers(runner: CommandRunner, method: str = WINDOWS_UPDATE) -> None:
    if method == WINDOWS_UPDATE:
        update_via_windows_update(runner)
    elif method == DRIVER_BOOSTER:
        update_via_driver_booster(runner)
    else:
        raise ValueError(f"Unknown driver update method: {method}")
