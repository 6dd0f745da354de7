"""
Member registration functionality.

Handles signup with an optional referral code, referral code validation
and joining the 7th Heaven Club. The recruiter link is written once here
and never changed afterwards.
"""

import secrets
import string

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from heaven_club.models.member import Member
from heaven_club.repositories.member_repository import MemberRepository
from heaven_club.services.base_service import BaseService, transaction
from heaven_club.utils.exceptions import (
    DuplicateMemberError,
    InvalidReferralCodeError,
    NotFoundError,
)

REFERRAL_CODE_PREFIX = "7H"
REFERRAL_CODE_LENGTH = 8
_REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_referral_code() -> str:
    """Random referral code like ``7HX4K2QP9``."""
    body = "".join(
        secrets.choice(_REFERRAL_CODE_ALPHABET)
        for _ in range(REFERRAL_CODE_LENGTH)
    )
    return f"{REFERRAL_CODE_PREFIX}{body}"


class MemberRegistrationService(BaseService):
    """Signup and club membership."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize registration service."""
        super().__init__(session)
        self.member_repo = MemberRepository(session)

    async def validate_referral_code(self, code: str) -> Member:
        """
        Resolve a referral code to an active club member.

        Args:
            code: Referral code as entered (surrounding spaces ignored)

        Returns:
            Recruiting member

        Raises:
            InvalidReferralCodeError: If unknown or not a club member
        """
        normalized = (code or "").strip().upper()
        if not normalized:
            raise InvalidReferralCodeError("Referral code is required")

        recruiter = await self.member_repo.get_by_referral_code(normalized)
        if recruiter is None or not recruiter.is_club_member:
            raise InvalidReferralCodeError(
                "Invalid or inactive referral code"
            )
        return recruiter

    async def _unique_referral_code(self) -> str:
        while True:
            code = generate_referral_code()
            # Collision is unlikely but checked anyway
            if not await self.member_repo.exists(referral_code=code):
                return code

    @transaction
    async def register_member(
        self,
        full_name: str,
        email: str | None = None,
        phone: str | None = None,
        referral_code: str | None = None,
        join_club: bool = False,
    ) -> Member:
        """
        Register new member with referral support.

        Args:
            full_name: Display name
            email: Email (stored lowercase, must be unique)
            phone: Phone number
            referral_code: Recruiter's referral code
            join_club: Opt into the referral program immediately

        Returns:
            Created member

        Raises:
            DuplicateMemberError: If the email is already registered
            InvalidReferralCodeError: If the referral code is invalid
        """
        normalized_email = email.strip().lower() if email else None
        if normalized_email and await self.member_repo.get_by_email(
            normalized_email
        ):
            raise DuplicateMemberError(
                f"Member with email {normalized_email} already exists"
            )

        recruiter_id = None
        if referral_code:
            recruiter = await self.validate_referral_code(referral_code)
            recruiter_id = recruiter.id

        try:
            member = await self.member_repo.create(
                full_name=full_name.strip(),
                email=normalized_email,
                phone=phone.strip() if phone else None,
                referral_code=await self._unique_referral_code(),
                recruiter_id=recruiter_id,
                is_club_member=join_club,
            )
        except IntegrityError as e:
            raise DuplicateMemberError(
                f"Member with email {normalized_email} already exists"
            ) from e

        self.logger.info(
            f"Member registered: id={member.id}, "
            f"recruiter_id={recruiter_id}, club={join_club}"
        )
        return member

    @transaction
    async def join_club(self, member_id: int) -> Member:
        """
        Opt a member into the 7th Heaven Club. Idempotent.

        Raises:
            NotFoundError: If member does not exist
        """
        member = await self.member_repo.get_by_id(member_id)
        if member is None:
            raise NotFoundError(f"Member {member_id} not found")

        if not member.is_club_member:
            member = await self.member_repo.update(
                member_id, is_club_member=True
            )
            self.logger.info(f"Member {member_id} joined the club")

        return member
