from __future__ import annotations

from typing import Optional, Sequence

from ..pipeline import ProvisionContext


class ElevatePhase:
    phase_id = "10_elevate"

    def __init__(self, argv: Optional[Sequence[str]] = None) -> None:
        # Arguments handed to the elevated relaunch; defaults to sys.argv[1:].
        self.argv = argv

    def run(self, ctx: ProvisionContext) -> None:
        ctx.orchestrator.ensure_elevated(self.argv)
