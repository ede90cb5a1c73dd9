from __future__ import annotations

import logging
from collections import Counter

from ..pipeline import ProvisionContext

logger = logging.getLogger(__name__)


class PackagesPhase:
    phase_id = "50_packages"

    def run(self, ctx: ProvisionContext) -> None:
        outcomes = ctx.orchestrator.install_all(ctx.packages)
        ctx.outcomes.extend(outcomes)

        counts = Counter(o.status.value for o in outcomes)
        ctx.orchestrator.log.append(
            "Packages: {} installed, {} already present, {} failed".format(
                counts.get("installed", 0),
                counts.get("already-present", 0),
                counts.get("failed", 0),
            )
        )
