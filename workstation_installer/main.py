from __future__ import annotations

import argparse
import logging
import os
from typing import FrozenSet, List, Optional, Sequence

from .config import ProvisionConfig, load_config
from .lib.command import CommandRunner, SubprocessRunner
from .logging_utils import InstallLog, LoggerInstallLog, configure_logging
from .orchestrator import InstallationOrchestrator
from .phases import (
    CleanupPhase,
    DriversPhase,
    ElevatePhase,
    PackagesPhase,
    RestartPromptPhase,
    SubsystemPhase,
    UpdateManagerPhase,
)
from .pipeline import PipelineResult, ProvisionContext, run_pipeline
from .summary_store import save_summary

logger = logging.getLogger(__name__)

# Phase subsets for the "only" flags. Elevation always comes first.
ONLY_PHASES = {
    "wsl": frozenset({ElevatePhase.phase_id, SubsystemPhase.phase_id}),
    "driver": frozenset({ElevatePhase.phase_id, DriversPhase.phase_id}),
    "pack": frozenset({ElevatePhase.phase_id, PackagesPhase.phase_id, CleanupPhase.phase_id}),
}


def build_phases(argv: Optional[Sequence[str]] = None):
    return [
        ElevatePhase(argv),
        UpdateManagerPhase(),
        SubsystemPhase(),
        DriversPhase(),
        PackagesPhase(),
        CleanupPhase(),
        RestartPromptPhase(),
    ]


def select_phases(*, wsl: bool, driver: bool, pack: bool, restart_prompt: bool) -> Optional[FrozenSet[str]]:
    """Phase ids to run; None means the full default sequence."""

    chosen = [name for name, on in (("wsl", wsl), ("driver", driver), ("pack", pack)) if on]
    if not chosen:
        if restart_prompt:
            return None
        return frozenset(p.phase_id for p in build_phases() if p.phase_id != RestartPromptPhase.phase_id)

    selected: set[str] = set()
    for name in chosen:
        selected |= ONLY_PHASES[name]
    return frozenset(selected)


def build_orchestrator(
    cfg: ProvisionConfig,
    *,
    runner: Optional[CommandRunner] = None,
    log: Optional[InstallLog] = None,
) -> InstallationOrchestrator:
    if runner is None:
        runner = SubprocessRunner(
            dry_run=cfg.dry_run,
            timeout_s=cfg.command_timeout_s,
            fail_on_stderr=cfg.fail_on_stderr,
        )
    return InstallationOrchestrator(
        runner,
        log or LoggerInstallLog(),
        parallel=cfg.parallel,
        max_workers=cfg.max_workers,
        default_distribution=cfg.default_distribution,
        driver_method=cfg.driver_method,
    )


def run(
    cfg: ProvisionConfig,
    *,
    only: Optional[FrozenSet[str]] = None,
    relaunch_args: Optional[Sequence[str]] = None,
    orchestrator: Optional[InstallationOrchestrator] = None,
) -> PipelineResult:
    """Run the provisioning phases and return the aggregated result."""

    orch = orchestrator or build_orchestrator(cfg)
    ctx = ProvisionContext(orchestrator=orch, packages=cfg.packages)
    result = run_pipeline(ctx=ctx, phases=build_phases(relaunch_args), only=only)

    if result.failed_phases:
        orch.log.append(
            f"Finished with errors in: {', '.join(sorted(result.failed_phases))}",
            level=logging.WARNING,
        )
    else:
        orch.log.append("All tasks completed successfully.")
    return result


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="workstation-installer")
    p.add_argument("--wsl", action="store_true", help="Only install/update WSL")
    p.add_argument("--driver", action="store_true", help="Only update drivers")
    p.add_argument("--pack", action="store_true", help="Only install/upgrade packages (then clean up)")
    p.add_argument("--config", default=None, help="Path to provisioning config (yaml)")
    p.add_argument("--log", default=None, help="Path to install log")
    p.add_argument("--summary", default=None, help="Write run summary (json|yaml)")
    p.add_argument("--dry-run", action="store_true", help="Log commands without executing them")
    p.add_argument("--parallel", action="store_true", help="Install packages concurrently")
    p.add_argument("--no-prompt", action="store_true", help="Skip the restart prompt")
    p.add_argument("--workdir", default=None, help=argparse.SUPPRESS)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    # Unknown flags are ignored; the default sequence still runs.
    args, unknown = build_parser().parse_known_args(argv)
    if unknown:
        logger.debug("Ignoring unrecognized arguments: %s", " ".join(unknown))

    try:
        if args.workdir:
            os.chdir(args.workdir)
        cfg = load_config(args.config).with_overrides(
            log_path=args.log,
            dry_run=True if args.dry_run else None,
            parallel=True if args.parallel else None,
            restart_prompt=False if args.no_prompt else None,
        )
        configure_logging(log_path=cfg.log_path)

        only = select_phases(
            wsl=args.wsl,
            driver=args.driver,
            pack=args.pack,
            restart_prompt=cfg.restart_prompt,
        )
        result = run(cfg, only=only, relaunch_args=argv)

        if args.summary:
            save_summary(args.summary, result.to_dict())
    except Exception as e:
        logger.error("Error: %s", e, exc_info=True)
    return 0
