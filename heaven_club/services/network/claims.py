"""
Reward claims.

Members claim the prize of a completed odd-level tier. Completion is
re-checked against the live network before a claim is stored. Admins
approve and deliver claims. Nothing is sent from here: approval only logs
that the member is due a congratulation.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from heaven_club.config.tiers import REWARD_LEVELS, get_tier
from heaven_club.models.reward_claim import ClaimStatus, RewardClaim
from heaven_club.repositories.reward_claim_repository import (
    RewardClaimRepository,
)
from heaven_club.services.base_service import BaseService, transaction
from heaven_club.services.network.aggregator import NetworkAggregator
from heaven_club.services.network.tiers import evaluate_level
from heaven_club.utils.exceptions import (
    DuplicateClaimError,
    InvalidClaimStatusError,
    InvalidRewardLevelError,
    NotFoundError,
    TierNotCompletedError,
)

# Statuses an admin may set
ADMIN_CLAIM_STATUSES = (ClaimStatus.APPROVED, ClaimStatus.DELIVERED)


@dataclass(frozen=True)
class ClaimListing:
    """Admin claims view."""

    claims: list[RewardClaim]
    pending_count: int


class RewardClaimService(BaseService):
    """Reward claim processing."""

    def __init__(
        self,
        session: AsyncSession,
        aggregator: NetworkAggregator | None = None,
    ) -> None:
        """Initialize reward claim service."""
        super().__init__(session)
        self.claim_repo = RewardClaimRepository(session)
        self.aggregator = aggregator or NetworkAggregator(session)

    @transaction
    async def claim_reward(self, member_id: int, level: int) -> RewardClaim:
        """
        Claim the reward of a completed tier.

        Args:
            member_id: Claiming member
            level: Tier level (1, 3, 5 or 7)

        Returns:
            Created PENDING claim

        Raises:
            InvalidRewardLevelError: If the level carries no reward
            NotFoundError: If member does not exist
            DuplicateClaimError: If the tier was already claimed
            TierNotCompletedError: If the tier target is not reached
        """
        tier = get_tier(level)
        if tier is None:
            levels = ", ".join(str(item) for item in REWARD_LEVELS)
            raise InvalidRewardLevelError(
                f"Invalid level {level}. Only Heaven {levels} have rewards."
            )

        counts = await self.aggregator.get_level_counts(member_id)

        existing = await self.claim_repo.get_for_level(member_id, level)
        if existing is not None:
            raise DuplicateClaimError(
                f"Heaven {level} reward already claimed. "
                f"Status: {existing.status}"
            )

        progress = evaluate_level(tier, counts.count_at(level))
        if not progress.complete:
            raise TierNotCompletedError(
                f"Heaven {level} is not completed yet. You have "
                f"{progress.count}/{progress.target} members."
            )

        try:
            claim = await self.claim_repo.create(
                member_id=member_id,
                level=level,
                amount=tier.reward,
                status=ClaimStatus.PENDING.value,
            )
        except IntegrityError as e:
            # Concurrent claim won the unique constraint
            raise DuplicateClaimError(
                f"Heaven {level} reward already claimed"
            ) from e

        self.logger.info(
            f"Reward claimed: member_id={member_id}, level={level}, "
            f"amount={tier.reward!r}, claim_id={claim.id}"
        )
        return claim

    async def list_member_claims(self, member_id: int) -> list[RewardClaim]:
        """
        A member's claims, newest first.

        Raises:
            NotFoundError: If member does not exist
        """
        await self.aggregator.get_member(member_id)
        return await self.claim_repo.list_by_member(member_id)

    async def list_claims(
        self, status: ClaimStatus | None = None
    ) -> ClaimListing:
        """
        All claims for the admin view.

        Args:
            status: Optional status filter

        Returns:
            ClaimListing with the pending count
        """
        claims = await self.claim_repo.list_by_status(status)
        pending_count = await self.claim_repo.count_pending()
        return ClaimListing(claims=claims, pending_count=pending_count)

    @transaction
    async def update_claim_status(
        self,
        claim_id: int,
        status: ClaimStatus | str,
        note: str | None = None,
    ) -> RewardClaim:
        """
        Approve or deliver a claim.

        Args:
            claim_id: Claim ID
            status: APPROVED or DELIVERED
            note: Admin note. Omitted keeps the current note, an empty
                string clears it

        Returns:
            Updated claim

        Raises:
            InvalidClaimStatusError: If status is not settable by admins
            NotFoundError: If claim does not exist
        """
        try:
            new_status = ClaimStatus(status)
        except ValueError:
            new_status = None
        if new_status not in ADMIN_CLAIM_STATUSES:
            allowed = " or ".join(item.value for item in ADMIN_CLAIM_STATUSES)
            raise InvalidClaimStatusError(
                f"Invalid status {status!r}. Status must be {allowed}."
            )

        claim = await self.claim_repo.get_by_id(claim_id, for_update=True)
        if claim is None:
            raise NotFoundError(f"Claim {claim_id} not found")

        changes: dict = {
            "status": new_status.value,
            "processed_at": datetime.now(UTC),
        }
        if note is not None:
            changes["note"] = note or None
        claim = await self.claim_repo.update(claim_id, **changes)

        self.logger.info(
            f"Claim {claim_id} set to {new_status.value} "
            f"(member_id={claim.member_id}, level={claim.level})"
        )
        if new_status is ClaimStatus.APPROVED:
            self.logger.info(
                f"Member {claim.member_id} is due a congratulation "
                f"for Heaven {claim.level}"
            )
        return claim
