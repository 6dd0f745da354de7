"""
Member model.

Represents a registered customer. The ``recruiter_id`` self-reference is
the referral edge: every member points to the member whose referral code
was used at signup.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from heaven_club.models.base import Base

if TYPE_CHECKING:
    from heaven_club.models.reward_claim import RewardClaim


class Member(Base):
    """Member model - registered customers and club participants."""

    __tablename__ = "members"
    __table_args__ = (
        CheckConstraint(
            "recruiter_id IS NULL OR recruiter_id <> id",
            name="check_member_not_own_recruiter",
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # Identity
    full_name: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    email: Mapped[str | None] = mapped_column(
        String(255), nullable=True, unique=True, index=True
    )
    phone: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    referral_code: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True, index=True
    )

    # Referral edge (set once at signup)
    recruiter_id: Mapped[int | None] = mapped_column(
        ForeignKey("members.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Status flags
    is_club_member: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False, index=True
    )
    is_admin: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    recruiter: Mapped[Optional["Member"]] = relationship(
        "Member", remote_side=[id], back_populates="recruits"
    )
    recruits: Mapped[list["Member"]] = relationship(
        "Member", back_populates="recruiter"
    )
    reward_claims: Mapped[list["RewardClaim"]] = relationship(
        "RewardClaim", back_populates="member"
    )

    def __repr__(self) -> str:
        return (
            f"<Member(id={self.id}, referral_code={self.referral_code}, "
            f"recruiter_id={self.recruiter_id})>"
        )
