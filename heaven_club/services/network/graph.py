"""
Referral graph snapshot.

Loads every referral edge once and answers level counts for many members
without repeating a traversal per member. Counts are built bottom-up over
the forest: a member's level k is the sum of its children's level k-1.
"""

from collections import deque
from collections.abc import Iterable, Sequence

from loguru import logger

from heaven_club.repositories.member_repository import MemberRepository
from heaven_club.services.network.traversal import (
    NetworkCounts,
    TreeTraversalEngine,
)
from heaven_club.utils.exceptions import DataIntegrityError, NotFoundError

# Number of offending IDs quoted in integrity errors
_MAX_REPORTED_IDS = 10


class ReferralGraph:
    """
    In-memory snapshot of the recruiter forest.

    Built per request from the edge store. Not shared between requests.
    """

    def __init__(self, edges: Iterable[tuple[int, int | None]]) -> None:
        """
        Build snapshot from (member_id, recruiter_id) pairs.

        Raises:
            DataIntegrityError: If an edge points at a missing recruiter
        """
        self._recruiters: dict[int, int | None] = dict(edges)
        self._children: dict[int, list[int]] = {}

        orphans = sorted(
            member_id
            for member_id, recruiter_id in self._recruiters.items()
            if recruiter_id is not None and recruiter_id not in self._recruiters
        )
        if orphans:
            logger.error(f"Referral edges point at missing recruiters: {orphans}")
            raise DataIntegrityError(
                "Members reference missing recruiters: "
                f"{orphans[:_MAX_REPORTED_IDS]}"
            )

        for member_id, recruiter_id in self._recruiters.items():
            if recruiter_id is not None:
                self._children.setdefault(recruiter_id, []).append(member_id)

    @classmethod
    async def load(cls, member_repo: MemberRepository) -> "ReferralGraph":
        """Load snapshot of all edges with one query."""
        edges = await member_repo.load_edges()
        return cls(edges)

    def __len__(self) -> int:
        return len(self._recruiters)

    def __contains__(self, member_id: object) -> bool:
        return member_id in self._recruiters

    def children_of(self, member_id: int) -> list[int]:
        """Direct referrals of a member."""
        return list(self._children.get(member_id, ()))

    async def load_children(
        self, parent_ids: Sequence[int]
    ) -> dict[int, list[int]]:
        """Children loader for TreeTraversalEngine."""
        return {
            parent_id: self._children[parent_id]
            for parent_id in parent_ids
            if parent_id in self._children
        }

    def _topological_order(self) -> list[int]:
        """
        Members ordered so every recruiter comes before its recruits.

        Raises:
            DataIntegrityError: If some members sit on a cycle
        """
        roots = [
            member_id
            for member_id, recruiter_id in self._recruiters.items()
            if recruiter_id is None
        ]
        order: list[int] = []
        queue = deque(roots)
        while queue:
            member_id = queue.popleft()
            order.append(member_id)
            queue.extend(self._children.get(member_id, ()))

        if len(order) != len(self._recruiters):
            unreachable = sorted(set(self._recruiters) - set(order))
            logger.error(
                f"Referral cycle detected, {len(unreachable)} members "
                f"unreachable from any root"
            )
            raise DataIntegrityError(
                "Referral cycle detected among members: "
                f"{unreachable[:_MAX_REPORTED_IDS]}"
            )
        return order

    def compute_counts(
        self,
        member_ids: Iterable[int],
        engine: TreeTraversalEngine,
    ) -> dict[int, NetworkCounts]:
        """
        Level counts for many members from a single pass over the forest.

        Args:
            member_ids: Members to report
            engine: Supplies tier depth and integrity caps

        Returns:
            Dict mapping member ID to its NetworkCounts

        Raises:
            NotFoundError: If a requested member is not in the snapshot
            DataIntegrityError: On cycles or when a cap is exceeded
        """
        requested = list(member_ids)
        missing = [member_id for member_id in requested if member_id not in self]
        if missing:
            raise NotFoundError(f"Members not found: {missing[:_MAX_REPORTED_IDS]}")

        tier_depth = engine.tier_depth
        levels: dict[int, list[int]] = {}
        totals: dict[int, int] = {}
        heights: dict[int, int] = {}

        for member_id in reversed(self._topological_order()):
            counts = [0] * tier_depth
            total = 0
            height = 0
            children = self._children.get(member_id, ())
            if children:
                counts[0] = len(children)
                for child_id in children:
                    child_counts = levels[child_id]
                    for index in range(tier_depth - 1):
                        counts[index + 1] += child_counts[index]
                    total += 1 + totals[child_id]
                    height = max(height, 1 + heights[child_id])
            levels[member_id] = counts
            totals[member_id] = total
            heights[member_id] = height

        result: dict[int, NetworkCounts] = {}
        for member_id in requested:
            engine.check_limits(member_id, heights[member_id], totals[member_id])
            result[member_id] = NetworkCounts(
                level_counts=tuple(levels[member_id]),
                total_team_all_depths=totals[member_id],
            )

        logger.debug(
            f"Computed network counts for {len(result)} of "
            f"{len(self)} members"
        )
        return result
