from __future__ import annotations

from ..pipeline import ProvisionContext


class UpdateManagerPhase:
    phase_id = "20_update_manager"

    def run(self, ctx: ProvisionContext) -> None:
        ctx.orchestrator.update_manager()
