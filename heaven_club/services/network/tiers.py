"""
Reward tier evaluation.

Turns level counts into progress towards each odd-level reward tier.
Pure functions over their inputs.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from heaven_club.config.tiers import TIER_DEFINITIONS, TierDefinition
from heaven_club.services.network.traversal import NetworkCounts


@dataclass(frozen=True)
class LevelProgress:
    """Progress of one member towards one reward tier."""

    level: int
    count: int
    target: int
    progress: float  # Percentage, capped at 100
    complete: bool
    reward: str


def evaluate_level(tier: TierDefinition, count: int) -> LevelProgress:
    """
    Evaluate one tier.

    Completion is ``count >= target``. Progress is capped at 100.

    Args:
        tier: Tier definition
        count: Members at the tier's level

    Returns:
        LevelProgress
    """
    if tier.target <= 0:
        progress = 100.0
    else:
        progress = min(100.0, count / tier.target * 100)

    return LevelProgress(
        level=tier.level,
        count=count,
        target=tier.target,
        progress=progress,
        complete=count >= tier.target,
        reward=tier.reward,
    )


@dataclass(frozen=True)
class TierEvaluation:
    """Progress for every reward tier."""

    odd_level_progress: dict[int, LevelProgress]
    completed_levels: tuple[int, ...]

    def progress_for(self, level: int) -> LevelProgress:
        return self.odd_level_progress[level]

    @property
    def headline(self) -> LevelProgress:
        """Progress of the deepest tier."""
        return self.odd_level_progress[max(self.odd_level_progress)]


class TierEvaluator:
    """Maps level counts onto reward tiers."""

    def __init__(
        self, tiers: Mapping[int, TierDefinition] | None = None
    ) -> None:
        self.tiers = dict(tiers if tiers is not None else TIER_DEFINITIONS)
        if not self.tiers:
            raise ValueError("At least one reward tier is required")

    @property
    def headline_level(self) -> int:
        return max(self.tiers)

    def evaluate(self, counts: NetworkCounts) -> TierEvaluation:
        """
        Evaluate all tiers for a member's counts.

        Args:
            counts: Output of the traversal engine

        Returns:
            TierEvaluation with per-tier progress and completed levels
        """
        progress = {
            level: evaluate_level(tier, counts.count_at(level))
            for level, tier in sorted(self.tiers.items())
        }
        completed = tuple(
            level for level, item in progress.items() if item.complete
        )
        return TierEvaluation(
            odd_level_progress=progress,
            completed_levels=completed,
        )
