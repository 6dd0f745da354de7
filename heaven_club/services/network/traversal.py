"""
Referral tree traversal.

Breadth-first level counting below a root member. Level 1 is the root's
direct referrals, level k the referrals of level k-1. Counting goes on past
the tier depth so the whole team is counted as well, bounded by depth and
node caps.
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass

from loguru import logger

from heaven_club.config.settings import settings
from heaven_club.utils.exceptions import DataIntegrityError

# Returns child IDs grouped by parent for one traversal level
ChildrenLoader = Callable[
    [Sequence[int]], Awaitable[Mapping[int, Sequence[int]]]
]


@dataclass(frozen=True)
class NetworkCounts:
    """
    Team size of one member.

    Attributes:
        level_counts: Members per level, index 0 is level 1
        total_team_all_depths: All descendants at any depth
    """

    level_counts: tuple[int, ...]
    total_team_all_depths: int

    @classmethod
    def empty(cls, tier_depth: int) -> "NetworkCounts":
        return cls(level_counts=(0,) * tier_depth, total_team_all_depths=0)

    @property
    def tier_depth(self) -> int:
        return len(self.level_counts)

    @property
    def total_team_within_tier_depth(self) -> int:
        return sum(self.level_counts)

    def count_at(self, level: int) -> int:
        """Members at a 1-based level, 0 outside the counted range."""
        if 1 <= level <= len(self.level_counts):
            return self.level_counts[level - 1]
        return 0


def mapping_loader(children: Mapping[int, Sequence[int]]) -> ChildrenLoader:
    """
    Build a children loader over an in-memory adjacency mapping.

    Args:
        children: Parent ID to child IDs

    Returns:
        Async loader usable by TreeTraversalEngine
    """
    async def load(parent_ids: Sequence[int]) -> dict[int, Sequence[int]]:
        return {
            parent_id: children[parent_id]
            for parent_id in parent_ids
            if children.get(parent_id)
        }

    return load


class TreeTraversalEngine:
    """Counts members per level below a root, with integrity guards."""

    def __init__(
        self,
        tier_depth: int | None = None,
        max_depth: int | None = None,
        max_nodes: int | None = None,
    ) -> None:
        """
        Initialize traversal engine.

        Args:
            tier_depth: Levels reported in level_counts
            max_depth: Deepest level walked before the chain is rejected
            max_nodes: Most descendants counted before the tree is rejected
        """
        self.tier_depth = tier_depth or settings.network_tier_depth
        self.max_depth = max_depth or settings.network_max_traversal_depth
        self.max_nodes = max_nodes or settings.network_max_visited_nodes

        if self.max_depth < self.tier_depth:
            raise ValueError(
                f"max_depth ({self.max_depth}) must be >= "
                f"tier_depth ({self.tier_depth})"
            )

    def check_limits(self, root_id: int, depth: int, total: int) -> None:
        """
        Reject a team deeper or larger than the configured caps.

        Raises:
            DataIntegrityError: If a cap is exceeded
        """
        if depth > self.max_depth:
            raise DataIntegrityError(
                f"Referral chain below member {root_id} exceeds "
                f"{self.max_depth} levels"
            )
        if total > self.max_nodes:
            raise DataIntegrityError(
                f"Referral team of member {root_id} exceeds "
                f"{self.max_nodes} members"
            )

    async def count_levels(
        self, root_id: int, load_children: ChildrenLoader
    ) -> NetworkCounts:
        """
        Count descendants of a root member level by level.

        Args:
            root_id: Root member ID (existence checked by the caller)
            load_children: Loader returning children of a frontier

        Returns:
            NetworkCounts for the root

        Raises:
            DataIntegrityError: On a cycle or when a cap is exceeded
        """
        level_counts = [0] * self.tier_depth
        visited = {root_id}
        frontier: list[int] = [root_id]
        depth = 0
        total = 0

        while frontier:
            children = await load_children(frontier)

            next_frontier: list[int] = []
            for parent_id in frontier:
                for child_id in children.get(parent_id, ()):
                    if child_id in visited:
                        logger.error(
                            f"Referral cycle detected below member {root_id}: "
                            f"member {child_id} reached twice"
                        )
                        raise DataIntegrityError(
                            f"Referral cycle detected: member {child_id} "
                            f"appears twice in the network of member {root_id}"
                        )
                    visited.add(child_id)
                    next_frontier.append(child_id)

            if not next_frontier:
                break

            depth += 1
            total += len(next_frontier)
            self.check_limits(root_id, depth, total)

            if depth <= self.tier_depth:
                level_counts[depth - 1] = len(next_frontier)
            frontier = next_frontier

        logger.debug(
            f"Network traversed for member {root_id}: depth={depth}, "
            f"team={total}, levels={level_counts}"
        )

        return NetworkCounts(
            level_counts=tuple(level_counts),
            total_team_all_depths=total,
        )
