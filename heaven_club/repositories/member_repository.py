"""
Member repository.

Data access layer for Member model. This is the referral edge store:
edges are read through ``recruiter_id``.
"""

from collections.abc import Iterable, Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from heaven_club.models.member import Member
from heaven_club.repositories.base import BaseRepository

# Keeps IN (...) lists under driver bind-parameter limits
IN_CLAUSE_CHUNK_SIZE = 5000


def _chunks(ids: Sequence[int], size: int = IN_CLAUSE_CHUNK_SIZE) -> Iterable[Sequence[int]]:
    for start in range(0, len(ids), size):
        yield ids[start:start + size]


def _escape_like(term: str) -> str:
    return (
        term.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


class MemberRepository(BaseRepository[Member]):
    """Member repository with referral-graph queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize member repository."""
        super().__init__(Member, session)

    async def get_by_referral_code(
        self, referral_code: str
    ) -> Member | None:
        """
        Get member by referral code.

        Args:
            referral_code: Referral code

        Returns:
            Member or None
        """
        return await self.get_by(referral_code=referral_code)

    async def get_by_email(self, email: str) -> Member | None:
        """
        Get member by email.

        Args:
            email: Normalized (lowercase) email

        Returns:
            Member or None
        """
        return await self.get_by(email=email)

    async def get_children(self, member_id: int) -> list[Member]:
        """
        Get direct referrals of a member, oldest first.

        Args:
            member_id: Recruiter member ID

        Returns:
            List of directly recruited members
        """
        stmt = (
            select(Member)
            .where(Member.recruiter_id == member_id)
            .order_by(Member.created_at, Member.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_children_of(
        self, parent_ids: Sequence[int]
    ) -> list[Member]:
        """
        Get members recruited by any of the given members.

        Args:
            parent_ids: Recruiter member IDs

        Returns:
            List of child members ordered by ID
        """
        children: list[Member] = []
        for chunk in _chunks(list(parent_ids)):
            stmt = (
                select(Member)
                .where(Member.recruiter_id.in_(chunk))
                .order_by(Member.id)
            )
            result = await self.session.execute(stmt)
            children.extend(result.scalars().all())
        return children

    async def get_children_ids(
        self, parent_ids: Sequence[int]
    ) -> dict[int, list[int]]:
        """
        Get child IDs grouped by recruiter, for one traversal level.

        Optimized to avoid fetching full objects - only returns IDs.

        Args:
            parent_ids: Recruiter member IDs

        Returns:
            Dict mapping recruiter ID to its child IDs
        """
        children: dict[int, list[int]] = {}
        for chunk in _chunks(list(parent_ids)):
            stmt = (
                select(Member.id, Member.recruiter_id)
                .where(Member.recruiter_id.in_(chunk))
                .order_by(Member.id)
            )
            result = await self.session.execute(stmt)
            for child_id, recruiter_id in result.all():
                children.setdefault(recruiter_id, []).append(child_id)
        return children

    async def load_edges(self) -> list[tuple[int, int | None]]:
        """
        Load every referral edge in a single query.

        Returns:
            List of (member_id, recruiter_id) pairs
        """
        stmt = select(Member.id, Member.recruiter_id).order_by(Member.id)
        result = await self.session.execute(stmt)
        return [(row.id, row.recruiter_id) for row in result.all()]

    async def list_opted_in_members(
        self, search: str | None = None
    ) -> list[Member]:
        """
        List club members, optionally filtered by a search term.

        The term is matched case-insensitively as a substring of full
        name, email or referral code.

        Args:
            search: Optional search term

        Returns:
            List of club members ordered by ID
        """
        stmt = select(Member).where(Member.is_club_member.is_(True))

        term = (search or "").strip()
        if term:
            pattern = f"%{_escape_like(term)}%"
            stmt = stmt.where(
                or_(
                    Member.full_name.ilike(pattern, escape="\\"),
                    Member.email.ilike(pattern, escape="\\"),
                    Member.referral_code.ilike(pattern, escape="\\"),
                )
            )

        result = await self.session.execute(stmt.order_by(Member.id))
        return list(result.scalars().all())
