"""Snack expert badge checks."""

import logging
from dataclasses import dataclass
from typing import Protocol

from snack_meter.domain.snacks import ExpertBadge

_logger = logging.getLogger(__name__)

UNDETERMINED_REASON = "Could not determine expert status right now."


class ExpertJudge(Protocol):
    """Interface for deciding whether a snack earns the expert badge."""

    async def judge(self, snack_area: float) -> ExpertBadge:
        """Return the badge decision for a snack area in cm²."""


@dataclass
class ThresholdExpertJudge(ExpertJudge):
    """Awards the badge to snacks at or above a fixed area."""

    threshold: float = 100.0

    async def judge(self, snack_area: float) -> ExpertBadge:
        """Compare the area with the threshold."""
        if snack_area >= self.threshold:
            return ExpertBadge(
                is_expert=True,
                reason=(
                    f"A {snack_area:.1f} cm² snack? Only a true snack expert "
                    "picks one that big."
                ),
            )
        return ExpertBadge(
            is_expert=False,
            reason=(
                f"{snack_area:.1f} cm² is respectable, but experts go for "
                f"{self.threshold:.0f} cm² and up."
            ),
        )


@dataclass
class ExpertBadgeService:
    """Service that checks expert status without ever raising."""

    judge: ExpertJudge

    async def check(self, snack_area: float) -> ExpertBadge:
        """Return the badge decision, falling back to a negative answer."""
        if not snack_area > 0:
            return ExpertBadge(
                is_expert=False,
                reason=f"{UNDETERMINED_REASON} The snack area must be positive.",
            )
        try:
            return await self.judge.judge(snack_area)
        except Exception:
            _logger.exception("Expert badge check failed")
            return ExpertBadge(is_expert=False, reason=UNDETERMINED_REASON)
