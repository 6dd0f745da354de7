"""
Single source of truth for 7th Heaven Club reward tiers.

Only odd levels carry a reward. Targets grow by a factor of 5 from one
reward tier to the next. Reward amounts are display text, not inputs to
any calculation.
"""

from typing import NamedTuple


class TierDefinition(NamedTuple):
    """Reward tier configuration."""

    level: int  # Depth in the referral tree
    target: int  # Members required at this depth
    reward: str  # Display text for the prize


TIER_DEFINITIONS: dict[int, TierDefinition] = {
    1: TierDefinition(level=1, target=5, reward="Prize worth ₹5,000"),
    3: TierDefinition(level=3, target=25, reward="Prize worth ₹25,000"),
    5: TierDefinition(level=5, target=125, reward="Prize worth ₹1,25,000"),
    7: TierDefinition(level=7, target=625, reward="₹1 Crore Cash Prize"),
}

REWARD_LEVELS: tuple[int, ...] = tuple(sorted(TIER_DEFINITIONS))

# Level used for the leaders list headline progress
HEADLINE_LEVEL = max(REWARD_LEVELS)


def get_tier(level: int) -> TierDefinition | None:
    """
    Get tier definition for a level.

    Args:
        level: Tree depth

    Returns:
        TierDefinition or None if the level carries no reward
    """
    return TIER_DEFINITIONS.get(level)


def next_tier_target(level: int) -> int:
    """
    Target of the first reward tier at or below the given level.

    Falls back to the deepest tier target past the last tier.

    Args:
        level: Tree depth (1-based)

    Returns:
        Member count target
    """
    for tier_level in REWARD_LEVELS:
        if tier_level >= level:
            return TIER_DEFINITIONS[tier_level].target
    return TIER_DEFINITIONS[HEADLINE_LEVEL].target
