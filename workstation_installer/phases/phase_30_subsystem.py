from __future__ import annotations

from ..pipeline import ProvisionContext


class SubsystemPhase:
    phase_id = "30_subsystem"

    def run(self, ctx: ProvisionContext) -> None:
        ctx.orchestrator.manage_optional_subsystem()
