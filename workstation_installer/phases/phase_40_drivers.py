from __future__ import annotations

from ..pipeline import ProvisionContext


class DriversPhase:
    phase_id = "40_drivers"

    def run(self, ctx: ProvisionContext) -> None:
        # Best effort; failures are already logged by the orchestrator.
        ctx.orchestrator.update_drivers()
