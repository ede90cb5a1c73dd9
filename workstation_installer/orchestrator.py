from __future__ import annotations

import builtins
import enum
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .lib.choco import choco_clean, choco_has_package, choco_upgrade, choco_upgrade_self
from .lib.command import CommandError, CommandRunner
from .lib.drivers import WINDOWS_UPDATE
from .lib.drivers import update_drivers as run_driver_update
from .lib.elevation import is_elevated, relaunch_argv, relaunch_elevated
from .lib.wsl import wsl_install, wsl_list, wsl_set_default, wsl_update
from .logging_utils import InstallLog, LoggerInstallLog
from .packages import PackageRequest, dedup_packages

RESTART_QUESTION = "A system restart may be required. Do you want to restart now? (y/n): "


class InstallStatus(str, enum.Enum):
    ALREADY_PRESENT = "already-present"
    INSTALLED = "installed"
    FAILED = "failed"


@dataclass(frozen=True)
class PackageOutcome:
    package: PackageRequest
    status: InstallStatus
    error: Optional[str] = None

    def to_dict(self) -> dict:
        d = {"package": self.package.name, "status": self.status.value}
        if self.error:
            d["error"] = self.error
        return d


class InstallationOrchestrator:
    """Drives each provisioning operation against an injected command runner.

    Every operation isolates its own failures: errors are written to the
    install log and turned into return values, so one failing package or
    phase never stops the rest of the run.
    """

    def __init__(
        self,
        runner: CommandRunner,
        log: Optional[InstallLog] = None,
        *,
        parallel: bool = False,
        max_workers: int = 8,
        default_distribution: str = "Ubuntu",
        driver_method: str = WINDOWS_UPDATE,
        platform: str = sys.platform,
        input_fn: Callable[[str], str] = builtins.input,
        exit_fn: Callable[[int], None] = sys.exit,
    ) -> None:
        self.runner = runner
        self.log = log or LoggerInstallLog()
        self.parallel = parallel
        self.max_workers = max(1, max_workers)
        self.default_distribution = default_distribution
        self.driver_method = driver_method
        self.platform = platform
        self.input_fn = input_fn
        self.exit_fn = exit_fn

    # -- privileges ---------------------------------------------------------

    def ensure_elevated(self, argv: Optional[Sequence[str]] = None) -> bool:
        """Return True when already elevated.

        On Windows a non-elevated process asks for a RunAs relaunch and then
        exits; elsewhere the run continues without elevation.
        """
        if is_elevated(self.runner):
            self.log.append("Running with administrator privileges!")
            return True

        self.log.append("Requesting administrative privileges...")
        if not self.platform.startswith("win"):
            self.log.append(
                "Administrator privileges required for this operation; continuing without elevation.",
                level=logging.WARNING,
            )
            return False

        try:
            relaunch_elevated(self.runner, relaunch_argv(argv))
        except CommandError as e:
            self.log.append(f"Error requesting elevation: {e}", level=logging.ERROR)
            self.exit_fn(1)
        else:
            self.exit_fn(0)
        return False

    # -- package manager ----------------------------------------------------

    def update_manager(self) -> None:
        self.log.append("Updating Chocolatey...")
        choco_upgrade_self(self.runner)
        self.log.append("Chocolatey updated.")

    def is_installed(self, package: PackageRequest) -> bool:
        try:
            return choco_has_package(self.runner, package.name)
        except Exception:
            # Fail open: an unanswerable query leads to an install attempt.
            return False

    def install_or_upgrade(self, package: PackageRequest) -> PackageOutcome:
        try:
            if self.is_installed(package):
                self.log.append(f"{package} is already installed.")
                return PackageOutcome(package, InstallStatus.ALREADY_PRESENT)

            self.log.append(f"Installing {package}...")
            choco_upgrade(self.runner, package)
            self.log.append(f"{package} installed or upgraded successfully.")
            return PackageOutcome(package, InstallStatus.INSTALLED)
        except Exception as e:
            self.log.append(
                f"WARNING: Installation or upgrade of {package} may have failed: {e}",
                level=logging.WARNING,
            )
            return PackageOutcome(package, InstallStatus.FAILED, error=str(e))

    def install_all(self, packages: Sequence[PackageRequest]) -> List[PackageOutcome]:
        """Attempt every package exactly once and wait for all of them.

        Outcomes come back in list order whatever the dispatch mode.
        """
        todo = dedup_packages(packages)
        if not todo:
            return []

        if not self.parallel:
            return [self.install_or_upgrade(p) for p in todo]

        outcomes: List[PackageOutcome] = []
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(todo))) as pool:
            futures = [(p, pool.submit(self.install_or_upgrade, p)) for p in todo]
            for p, fut in futures:
                try:
                    outcomes.append(fut.result())
                except Exception as e:
                    outcomes.append(PackageOutcome(p, InstallStatus.FAILED, error=str(e)))
        return outcomes

    def cleanup(self) -> None:
        self.log.append("Cleaning up temporary files and cache...")
        choco_clean(self.runner)
        self.log.append("Cleanup completed.")

    # -- subsystem / drivers ------------------------------------------------

    def manage_optional_subsystem(self) -> bool:
        """Install WSL when absent, else update it; then pin the default distro.

        Returns False if any command in the phase failed.
        """
        try:
            try:
                listing = wsl_list(self.runner)
            except CommandError as e:
                # `wsl --list` exits non-zero when nothing is installed.
                self.log.append(f"WSL listing failed, treating WSL as absent: {e}", level=logging.WARNING)
                listing = ""

            if not listing.strip():
                self.log.append("Installing WSL...")
                wsl_install(self.runner)
                self.log.append("WSL installation completed.")
            else:
                self.log.append("WSL is already installed. Updating...")
                wsl_update(self.runner)
                self.log.append("WSL update completed.")

            self.log.append("Setting default WSL distribution...")
            wsl_set_default(self.runner, self.default_distribution)
            self.log.append(f"Default WSL distribution set to {self.default_distribution}.")
            return True
        except Exception as e:
            self.log.append(f"Error managing WSL: {e}", level=logging.ERROR)
            return False

    def update_drivers(self) -> bool:
        try:
            self.log.append(f"Updating drivers ({self.driver_method})...")
            run_driver_update(self.runner, self.driver_method)
            self.log.append("Drivers update completed!")
            return True
        except Exception as e:
            self.log.append(f"Error updating drivers: {e}", level=logging.ERROR)
            return False

    # -- restart ------------------------------------------------------------

    def prompt_restart(self) -> bool:
        try:
            answer = self.input_fn(RESTART_QUESTION)
        except (EOFError, OSError) as e:
            self.log.append(f"Could not read restart answer ({e!r}); not restarting.", level=logging.WARNING)
            return False

        if answer.strip().lower() not in {"y", "yes"}:
            return False

        self.log.append("Restarting system...")
        self.runner.run(["shutdown", "-r", "-t", "0"])
        return True
