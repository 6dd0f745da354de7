"""
Reward claim repository.

Data access layer for RewardClaim model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from heaven_club.models.reward_claim import ClaimStatus, RewardClaim
from heaven_club.repositories.base import BaseRepository


class RewardClaimRepository(BaseRepository[RewardClaim]):
    """Reward claim repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize reward claim repository."""
        super().__init__(RewardClaim, session)

    async def get_for_level(
        self, member_id: int, level: int
    ) -> RewardClaim | None:
        """Get a member's claim for one tier level."""
        return await self.get_by(member_id=member_id, level=level)

    async def list_by_member(self, member_id: int) -> list[RewardClaim]:
        """
        Get a member's claims, newest first.

        Args:
            member_id: Member ID

        Returns:
            List of claims
        """
        stmt = (
            select(RewardClaim)
            .where(RewardClaim.member_id == member_id)
            .order_by(RewardClaim.claimed_at.desc(), RewardClaim.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())

    async def list_by_status(
        self, status: ClaimStatus | None = None
    ) -> list[RewardClaim]:
        """
        Get all claims, newest first, optionally filtered by status.

        Args:
            status: Optional status filter

        Returns:
            List of claims with members eagerly loaded
        """
        stmt = select(RewardClaim)
        if status is not None:
            stmt = stmt.where(RewardClaim.status == status.value)
        stmt = stmt.order_by(
            RewardClaim.claimed_at.desc(), RewardClaim.id.desc()
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())

    async def count_pending(self) -> int:
        """Count claims awaiting review."""
        return await self.count(status=ClaimStatus.PENDING.value)
