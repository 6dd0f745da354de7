"""
RewardClaim model.

A member's claim for the prize of a completed reward tier.
"""

from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from heaven_club.models.base import Base

if TYPE_CHECKING:
    from heaven_club.models.member import Member


class ClaimStatus(StrEnum):
    """Reward claim status enumeration."""

    PENDING = "PENDING"  # Submitted by member, awaiting review
    APPROVED = "APPROVED"  # Approved by admin
    DELIVERED = "DELIVERED"  # Prize handed over


class RewardClaim(Base):
    """
    RewardClaim entity.

    Attributes:
        id: Primary key
        member_id: Claiming member
        level: Reward tier level (1, 3, 5 or 7)
        amount: Prize display text at claim time
        status: PENDING / APPROVED / DELIVERED
        note: Optional admin note
        claimed_at: When the claim was submitted
        processed_at: When an admin last changed the status
    """

    __tablename__ = "reward_claims"
    __table_args__ = (
        UniqueConstraint(
            "member_id", "level", name="uq_reward_claims_member_level"
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    member_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    level: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[str] = mapped_column(String(100), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ClaimStatus.PENDING.value,
        index=True,
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Timestamps
    claimed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Relationships
    member: Mapped["Member"] = relationship(
        "Member", back_populates="reward_claims", lazy="joined"
    )

    def __repr__(self) -> str:
        return (
            f"<RewardClaim(id={self.id}, member_id={self.member_id}, "
            f"level={self.level}, status={self.status})>"
        )
