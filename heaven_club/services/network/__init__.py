"""
Referral network services package.

Contains modular services for the 7th Heaven Club:
- traversal: Bounded level counting below one member
- graph: Whole-network snapshot with memoized counts
- tiers: Reward tier progress
- aggregator: Member, tree and leaders views
- registration: Signup, referral codes, club membership
- claims: Reward claims and admin review
"""

from heaven_club.services.network.aggregator import (
    MemberNetworkDetail,
    MemberNetworkSummary,
    NetworkAggregator,
    NetworkTreeNode,
)
from heaven_club.services.network.claims import ClaimListing, RewardClaimService
from heaven_club.services.network.graph import ReferralGraph
from heaven_club.services.network.registration import (
    MemberRegistrationService,
    generate_referral_code,
)
from heaven_club.services.network.tiers import (
    LevelProgress,
    TierEvaluation,
    TierEvaluator,
    evaluate_level,
)
from heaven_club.services.network.traversal import (
    NetworkCounts,
    TreeTraversalEngine,
    mapping_loader,
)


__all__ = [
    # Traversal
    "NetworkCounts",
    "TreeTraversalEngine",
    "mapping_loader",
    "ReferralGraph",
    # Tiers
    "LevelProgress",
    "TierEvaluation",
    "TierEvaluator",
    "evaluate_level",
    # Views
    "MemberNetworkDetail",
    "MemberNetworkSummary",
    "NetworkAggregator",
    "NetworkTreeNode",
    # Membership
    "MemberRegistrationService",
    "generate_referral_code",
    # Claims
    "ClaimListing",
    "RewardClaimService",
]
