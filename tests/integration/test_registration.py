"""
Integration tests for MemberRegistrationService.

Tests cover:
- Referral code generation and validation
- Signup with and without a recruiter
- Duplicate email handling
- Joining the club
"""

import re

import pytest

from heaven_club.services.network.registration import (
    MemberRegistrationService,
    generate_referral_code,
)
from heaven_club.utils.exceptions import (
    DuplicateMemberError,
    InvalidReferralCodeError,
    NotFoundError,
)


class TestReferralCodes:
    """Test referral code handling."""

    def test_generated_code_format(self):
        """Codes are 7H followed by 8 uppercase letters or digits."""
        code = generate_referral_code()

        assert re.fullmatch(r"7H[A-Z0-9]{8}", code)

    @pytest.mark.asyncio
    async def test_validate_normalizes_input(self, session, make_member):
        """Lowercase codes with spaces resolve to the recruiter."""
        recruiter = await make_member(referral_code="7HABCDEF12")
        service = MemberRegistrationService(session)

        found = await service.validate_referral_code("  7habcdef12 ")

        assert found.id == recruiter.id

    @pytest.mark.asyncio
    async def test_unknown_code(self, session):
        """Unknown code is rejected."""
        service = MemberRegistrationService(session)

        with pytest.raises(InvalidReferralCodeError):
            await service.validate_referral_code("7HNOPE0000")

    @pytest.mark.asyncio
    async def test_empty_code(self, session):
        """Blank code is rejected."""
        service = MemberRegistrationService(session)

        with pytest.raises(InvalidReferralCodeError, match="required"):
            await service.validate_referral_code("   ")

    @pytest.mark.asyncio
    async def test_code_of_dormant_member(self, session, make_member):
        """Codes of members outside the club are inactive."""
        await make_member(club=False, referral_code="7HDORMANT1")
        service = MemberRegistrationService(session)

        with pytest.raises(InvalidReferralCodeError, match="inactive"):
            await service.validate_referral_code("7HDORMANT1")


class TestRegisterMember:
    """Test signup."""

    @pytest.mark.asyncio
    async def test_register_without_recruiter(self, session):
        """A member without a code becomes a root."""
        service = MemberRegistrationService(session)

        member = await service.register_member(
            full_name=" Asha Verma ", email="Asha@Example.com", phone="+91 98765 43210"
        )

        assert member.id is not None
        assert member.full_name == "Asha Verma"
        assert member.email == "asha@example.com"
        assert member.recruiter_id is None
        assert member.is_club_member is False
        assert re.fullmatch(r"7H[A-Z0-9]{8}", member.referral_code)

    @pytest.mark.asyncio
    async def test_register_with_recruiter(self, session, make_member):
        """The recruiter link is taken from the referral code."""
        recruiter = await make_member(referral_code="7HLEADER01")
        service = MemberRegistrationService(session)

        member = await service.register_member(
            full_name="Ravi", referral_code="7hleader01", join_club=True
        )

        assert member.recruiter_id == recruiter.id
        assert member.is_club_member is True

    @pytest.mark.asyncio
    async def test_register_with_invalid_code(self, session):
        """Signup fails on an unknown code and stores nothing."""
        service = MemberRegistrationService(session)

        with pytest.raises(InvalidReferralCodeError):
            await service.register_member(full_name="Ravi", referral_code="7HMISSING0")

        assert await service.member_repo.count() == 0

    @pytest.mark.asyncio
    async def test_duplicate_email(self, session, make_member):
        """Emails are unique regardless of case."""
        await make_member(email="taken@example.com")
        service = MemberRegistrationService(session)

        with pytest.raises(DuplicateMemberError):
            await service.register_member(full_name="Copy", email="TAKEN@example.com")


class TestJoinClub:
    """Test club membership."""

    @pytest.mark.asyncio
    async def test_join(self, session, make_member):
        """Joining sets the club flag."""
        member = await make_member(club=False)
        service = MemberRegistrationService(session)

        joined = await service.join_club(member.id)

        assert joined.is_club_member is True

    @pytest.mark.asyncio
    async def test_join_is_idempotent(self, session, make_member):
        """Joining twice keeps the member in the club."""
        member = await make_member(club=True)
        service = MemberRegistrationService(session)

        joined = await service.join_club(member.id)

        assert joined.is_club_member is True

    @pytest.mark.asyncio
    async def test_unknown_member(self, session):
        """Unknown member raises NotFoundError."""
        service = MemberRegistrationService(session)

        with pytest.raises(NotFoundError):
            await service.join_club(31337)
