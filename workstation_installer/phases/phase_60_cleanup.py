from __future__ import annotations

from ..pipeline import ProvisionContext


class CleanupPhase:
    phase_id = "60_cleanup"

    def run(self, ctx: ProvisionContext) -> None:
        # Runs regardless of individual package outcomes.
        ctx.orchestrator.cleanup()
