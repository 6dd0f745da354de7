"""
Signup, referral code and club membership endpoints.
"""

from aiohttp import web

from heaven_club.schemas.network import (
    MemberSchema,
    ReferralCodeCheckSchema,
    ReferralCodeRequest,
    RegisterMemberRequest,
)
from heaven_club.services.network.registration import MemberRegistrationService
from heaven_club.web.keys import get_session
from heaven_club.web.responses import json_success, match_int, parse_body


async def validate_referral_handler(request: web.Request) -> web.Response:
    """POST /referral/validate"""
    body = await parse_body(request, ReferralCodeRequest)
    service = MemberRegistrationService(get_session(request))

    recruiter = await service.validate_referral_code(body.code)

    return json_success(
        ReferralCodeCheckSchema(referrer_name=recruiter.full_name),
        message="Valid referral code",
    )


async def register_member_handler(request: web.Request) -> web.Response:
    """POST /members"""
    body = await parse_body(request, RegisterMemberRequest)
    service = MemberRegistrationService(get_session(request))

    member = await service.register_member(
        full_name=body.full_name,
        email=body.email,
        phone=body.phone,
        referral_code=body.referral_code,
        join_club=body.join_club,
    )

    return json_success(MemberSchema.model_validate(member), status=201)


async def join_club_handler(request: web.Request) -> web.Response:
    """POST /members/{member_id}/club"""
    member_id = match_int(request, "member_id")
    service = MemberRegistrationService(get_session(request))

    member = await service.join_club(member_id)

    return json_success(MemberSchema.model_validate(member))
