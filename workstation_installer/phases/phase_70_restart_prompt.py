from __future__ import annotations

from ..pipeline import ProvisionContext


class RestartPromptPhase:
    phase_id = "70_restart_prompt"

    def run(self, ctx: ProvisionContext) -> None:
        ctx.restart_requested = ctx.orchestrator.prompt_restart()
