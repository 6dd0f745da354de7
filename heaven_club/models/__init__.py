"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from heaven_club.models.base import Base
from heaven_club.models.member import Member
from heaven_club.models.reward_claim import ClaimStatus, RewardClaim

__all__ = [
    # Base
    "Base",
    # Enums
    "ClaimStatus",
    # Core Models
    "Member",
    "RewardClaim",
]
