"""
Referral network request and response schemas.

Built from service dataclasses with the ``from_*`` constructors so the
HTTP layer never hands out free-form dicts.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import Field, field_serializer

from heaven_club.models.member import Member
from heaven_club.models.reward_claim import ClaimStatus, RewardClaim
from heaven_club.schemas.common import MAX_ID, BaseSchema
from heaven_club.services.network.aggregator import (
    MemberNetworkDetail,
    MemberNetworkSummary,
    NetworkTreeNode,
)
from heaven_club.services.network.tiers import LevelProgress


def _round_progress(value: float) -> float:
    return round(value, 1)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class LeadersQuery(BaseSchema):
    """Query string of the leaders list."""

    search: str | None = Field(default=None, max_length=255)


class NetworkGraphQuery(BaseSchema):
    """Query string of the drill-down view."""

    target_user_id: int = Field(..., gt=0, le=MAX_ID)
    depth: int | None = Field(default=None, gt=0)


class MemberClaimsQuery(BaseSchema):
    """Query string of a member's claims."""

    member_id: int = Field(..., gt=0, le=MAX_ID)


class AdminClaimsQuery(BaseSchema):
    """Query string of the admin claims list."""

    status: ClaimStatus | None = None


class ClaimRequest(BaseSchema):
    """Body of a reward claim."""

    member_id: int = Field(..., gt=0, le=MAX_ID)
    level: int


class ClaimStatusUpdateRequest(BaseSchema):
    """Body of an admin claim update."""

    status: str = Field(..., min_length=1)
    note: str | None = Field(default=None, max_length=2000)


class ReferralCodeRequest(BaseSchema):
    """Body of a referral code check."""

    code: str = Field(..., min_length=1, max_length=20)


class RegisterMemberRequest(BaseSchema):
    """Body of a signup."""

    full_name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str | None = Field(default=None, max_length=50)
    referral_code: str | None = Field(default=None, max_length=20)
    join_club: bool = False


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class LevelProgressSchema(BaseSchema):
    """Progress towards one reward tier."""

    level: int
    count: int
    target: int
    progress: float
    complete: bool
    reward: str

    @field_serializer("progress")
    def serialize_progress(self, value: float) -> float:
        return _round_progress(value)

    @classmethod
    def from_progress(cls, item: LevelProgress) -> "LevelProgressSchema":
        return cls(
            level=item.level,
            count=item.count,
            target=item.target,
            progress=item.progress,
            complete=item.complete,
            reward=item.reward,
        )


class MemberSchema(BaseSchema):
    """Member identity fields."""

    id: int
    full_name: str
    email: str | None = None
    phone: str | None = None
    referral_code: str
    recruiter_id: int | None = None
    is_club_member: bool
    created_at: datetime


class NetworkStatsSchema(BaseSchema):
    """Team counts and tier progress of one member."""

    level_counts: list[int]
    total_team_all_depths: int
    total_team_within_tier_depth: int
    level1_count: int
    level7_count: int
    level7_progress: float
    odd_level_progress: dict[str, LevelProgressSchema]
    completed_levels: list[int]

    @field_serializer("level7_progress")
    def serialize_level7_progress(self, value: float) -> float:
        return _round_progress(value)

    @classmethod
    def from_summary(cls, summary: MemberNetworkSummary) -> "NetworkStatsSchema":
        return cls(
            level_counts=list(summary.counts.level_counts),
            total_team_all_depths=summary.counts.total_team_all_depths,
            total_team_within_tier_depth=summary.counts.total_team_within_tier_depth,
            level1_count=summary.level1_count,
            level7_count=summary.level7_count,
            level7_progress=summary.level7_progress,
            odd_level_progress={
                f"level{level}": LevelProgressSchema.from_progress(item)
                for level, item in summary.tiers.odd_level_progress.items()
            },
            completed_levels=list(summary.tiers.completed_levels),
        )


class LeaderSchema(MemberSchema):
    """Club member with network stats."""

    stats: NetworkStatsSchema

    @classmethod
    def from_summary(cls, summary: MemberNetworkSummary) -> "LeaderSchema":
        member = MemberSchema.model_validate(summary.member)
        return cls(
            **member.model_dump(),
            stats=NetworkStatsSchema.from_summary(summary),
        )


class DirectReferralSchema(BaseSchema):
    """One direct referral."""

    id: int
    name: str
    joined_at: datetime
    is_club_member: bool

    @classmethod
    def from_member(cls, member: Member) -> "DirectReferralSchema":
        return cls(
            id=member.id,
            name=member.full_name,
            joined_at=member.created_at,
            is_club_member=member.is_club_member,
        )


class MemberNetworkSchema(BaseSchema):
    """Dashboard view of one member."""

    member: MemberSchema
    stats: NetworkStatsSchema
    direct_referrals: list[DirectReferralSchema]

    @classmethod
    def from_detail(cls, detail: MemberNetworkDetail) -> "MemberNetworkSchema":
        return cls(
            member=MemberSchema.model_validate(detail.summary.member),
            stats=NetworkStatsSchema.from_summary(detail.summary),
            direct_referrals=[
                DirectReferralSchema.from_member(member)
                for member in detail.direct_referrals
            ],
        )


class NetworkNodeSchema(BaseSchema):
    """One node of the drill-down tree."""

    id: int
    name: str
    level: int
    status: Literal["ACTIVE", "DORMANT"]
    joined_at: date
    team_size: int
    next_level_target: int
    children: list["NetworkNodeSchema"]

    @classmethod
    def from_node(cls, node: NetworkTreeNode) -> "NetworkNodeSchema":
        return cls(
            id=node.member.id,
            name=node.member.full_name or "User",
            level=node.level,
            status=node.status,
            joined_at=node.member.created_at.date(),
            team_size=node.direct_referral_count,
            next_level_target=node.next_level_target,
            children=[cls.from_node(child) for child in node.children],
        )


class NetworkGraphSchema(BaseSchema):
    """Drill-down view: stats plus tree."""

    member: MemberSchema
    stats: NetworkStatsSchema
    tree: NetworkNodeSchema


class ClaimMemberSchema(BaseSchema):
    """Member fields shown with a claim."""

    id: int
    full_name: str
    email: str | None = None
    phone: str | None = None
    referral_code: str


class RewardClaimSchema(BaseSchema):
    """One reward claim."""

    id: int
    member_id: int
    level: int
    amount: str
    status: ClaimStatus
    note: str | None = None
    claimed_at: datetime
    processed_at: datetime | None = None


class AdminRewardClaimSchema(RewardClaimSchema):
    """Reward claim with member details."""

    member: ClaimMemberSchema

    @classmethod
    def from_claim(cls, claim: RewardClaim) -> "AdminRewardClaimSchema":
        return cls.model_validate(claim)


class AdminClaimListSchema(BaseSchema):
    """Admin claims view."""

    claims: list[AdminRewardClaimSchema]
    pending_count: int


class ReferralCodeCheckSchema(BaseSchema):
    """Result of a referral code check."""

    valid: Literal[True] = True
    referrer_name: str
