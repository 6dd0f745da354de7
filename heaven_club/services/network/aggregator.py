"""
Referral network aggregation.

Answers "how big is this member's team and which reward tiers has it
reached" for one member, for a drill-down tree, and for every club member
at once.
"""

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from heaven_club.config.settings import settings
from heaven_club.config.tiers import next_tier_target
from heaven_club.models.member import Member
from heaven_club.repositories.member_repository import MemberRepository
from heaven_club.services.base_service import BaseService
from heaven_club.services.network.graph import ReferralGraph
from heaven_club.services.network.tiers import (
    LevelProgress,
    TierEvaluation,
    TierEvaluator,
)
from heaven_club.services.network.traversal import (
    NetworkCounts,
    TreeTraversalEngine,
)
from heaven_club.utils.exceptions import DataIntegrityError, NotFoundError


@dataclass(frozen=True)
class MemberNetworkSummary:
    """Counts and tier progress of one member."""

    member: Member
    counts: NetworkCounts
    tiers: TierEvaluation

    @property
    def level1_count(self) -> int:
        return self.counts.count_at(1)

    @property
    def headline(self) -> LevelProgress:
        return self.tiers.headline

    @property
    def level7_count(self) -> int:
        return self.headline.count

    @property
    def level7_progress(self) -> float:
        return self.headline.progress


@dataclass(frozen=True)
class MemberNetworkDetail:
    """Member summary with direct referrals."""

    summary: MemberNetworkSummary
    direct_referrals: list[Member]


@dataclass
class NetworkTreeNode:
    """One member in a drill-down tree."""

    member: Member
    level: int
    children: list["NetworkTreeNode"] = field(default_factory=list)
    direct_referral_count: int = 0

    @property
    def status(self) -> str:
        return "ACTIVE" if self.member.is_club_member else "DORMANT"

    @property
    def next_level_target(self) -> int:
        return next_tier_target(self.level + 1)


class NetworkAggregator(BaseService):
    """Read-only referral network views."""

    def __init__(
        self,
        session: AsyncSession,
        engine: TreeTraversalEngine | None = None,
        evaluator: TierEvaluator | None = None,
    ) -> None:
        """
        Initialize aggregator.

        Args:
            session: Async database session
            engine: Traversal engine, defaults from settings
            evaluator: Tier evaluator, defaults to configured tiers
        """
        super().__init__(session)
        self.member_repo = MemberRepository(session)
        self.engine = engine or TreeTraversalEngine()
        self.evaluator = evaluator or TierEvaluator()

    async def get_member(self, member_id: int) -> Member:
        """
        Get member or raise.

        Raises:
            NotFoundError: If member does not exist
        """
        member = await self.member_repo.get_by_id(member_id)
        if member is None:
            raise NotFoundError(f"Member {member_id} not found")
        return member

    async def get_level_counts(self, member_id: int) -> NetworkCounts:
        """
        Count a member's team level by level.

        Issues one query per level through the edge store.

        Args:
            member_id: Root member ID

        Returns:
            NetworkCounts

        Raises:
            NotFoundError: If member does not exist
            DataIntegrityError: On cycles or exceeded caps
        """
        await self.get_member(member_id)
        return await self.engine.count_levels(
            member_id, self.member_repo.get_children_ids
        )

    async def get_member_summary(self, member_id: int) -> MemberNetworkSummary:
        """Counts and tier progress for one member."""
        member = await self.get_member(member_id)
        counts = await self.engine.count_levels(
            member_id, self.member_repo.get_children_ids
        )
        return MemberNetworkSummary(
            member=member,
            counts=counts,
            tiers=self.evaluator.evaluate(counts),
        )

    async def get_member_network(self, member_id: int) -> MemberNetworkDetail:
        """
        Dashboard view of one member.

        Args:
            member_id: Member ID

        Returns:
            Summary plus direct referrals, oldest first
        """
        summary = await self.get_member_summary(member_id)
        direct_referrals = await self.member_repo.get_children(member_id)
        return MemberNetworkDetail(
            summary=summary, direct_referrals=direct_referrals
        )

    async def list_leaders(
        self, search: str | None = None
    ) -> list[MemberNetworkSummary]:
        """
        Summaries for every club member.

        Loads the referral graph once and computes all counts in one pass.

        Args:
            search: Optional case-insensitive filter on name, email, code

        Returns:
            Summaries ordered by member ID
        """
        members = await self.member_repo.list_opted_in_members(search)
        if not members:
            return []

        graph = await ReferralGraph.load(self.member_repo)
        counts = graph.compute_counts(
            (member.id for member in members), self.engine
        )

        leaders = [
            MemberNetworkSummary(
                member=member,
                counts=counts[member.id],
                tiers=self.evaluator.evaluate(counts[member.id]),
            )
            for member in members
        ]

        self.logger.debug(
            f"Leaders computed: {len(leaders)} club members over "
            f"{len(graph)} members (search={search!r})"
        )
        return leaders

    async def get_network_tree(
        self, member_id: int, depth: int | None = None
    ) -> NetworkTreeNode:
        """
        Nested tree below a member.

        Args:
            member_id: Root member ID
            depth: Levels to expand, capped at the tier depth

        Returns:
            Root NetworkTreeNode

        Raises:
            NotFoundError: If member does not exist
            DataIntegrityError: If a member is reached twice
        """
        root = await self.get_member(member_id)
        depth = min(
            depth or settings.network_graph_default_depth,
            self.engine.tier_depth,
        )

        root_node = NetworkTreeNode(member=root, level=0)
        visited = {root.id}
        frontier = [root_node]

        for level in range(1, depth + 1):
            by_id = {node.member.id: node for node in frontier}
            children = await self.member_repo.get_children_of(list(by_id))

            next_frontier: list[NetworkTreeNode] = []
            for child in children:
                if child.id in visited:
                    raise DataIntegrityError(
                        f"Referral cycle detected: member {child.id} "
                        f"appears twice in the tree of member {member_id}"
                    )
                visited.add(child.id)
                node = NetworkTreeNode(member=child, level=level)
                parent = by_id[child.recruiter_id]
                parent.children.append(node)
                parent.direct_referral_count += 1
                next_frontier.append(node)

            frontier = next_frontier
            if not frontier:
                break

        # Nodes on the last expanded level still report their team size
        if frontier:
            by_id = {node.member.id: node for node in frontier}
            grandchildren = await self.member_repo.get_children_ids(list(by_id))
            for parent_id, child_ids in grandchildren.items():
                by_id[parent_id].direct_referral_count = len(child_ids)

        return root_node
