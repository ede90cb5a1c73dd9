from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Any, Dict, List, Optional, Protocol, Sequence

from .orchestrator import InstallationOrchestrator, PackageOutcome
from .packages import PackageRequest

logger = logging.getLogger(__name__)


@dataclass
class ProvisionContext:
    orchestrator: InstallationOrchestrator
    packages: Sequence[PackageRequest]
    outcomes: List[PackageOutcome] = field(default_factory=list)
    restart_requested: bool = False


class Phase(Protocol):
    """A single provisioning phase."""

    phase_id: str

    def run(self, ctx: ProvisionContext) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_phases: List[str]
    failed_phases: Dict[str, str]
    outcomes: List[PackageOutcome]
    restart_requested: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ran_phases": list(self.ran_phases),
            "failed_phases": dict(self.failed_phases),
            "packages": [o.to_dict() for o in self.outcomes],
            "restart_requested": self.restart_requested,
        }


def run_pipeline(
    *,
    ctx: ProvisionContext,
    phases: Sequence[Phase],
    only: Optional[AbstractSet[str]] = None,
) -> PipelineResult:
    """Run phases in order; a failing phase is logged and the next one still runs."""

    ran: List[str] = []
    failed: Dict[str, str] = {}
    log = ctx.orchestrator.log

    for phase in phases:
        if only is not None and phase.phase_id not in only:
            continue

        logger.debug("Running phase %s", phase.phase_id)
        ran.append(phase.phase_id)
        try:
            phase.run(ctx)
        except Exception as e:
            failed[phase.phase_id] = str(e)
            log.append(f"Error in phase {phase.phase_id}: {e}", level=logging.ERROR)

    return PipelineResult(
        ran_phases=ran,
        failed_phases=failed,
        outcomes=list(ctx.outcomes),
        restart_requested=ctx.restart_requested,
    )
