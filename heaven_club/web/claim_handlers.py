"""
Reward claim endpoints.
"""

from aiohttp import web

from heaven_club.schemas.network import (
    AdminClaimListSchema,
    AdminClaimsQuery,
    AdminRewardClaimSchema,
    ClaimRequest,
    ClaimStatusUpdateRequest,
    MemberClaimsQuery,
    RewardClaimSchema,
)
from heaven_club.services.network.claims import RewardClaimService
from heaven_club.web.keys import get_session
from heaven_club.web.responses import (
    json_success,
    match_int,
    parse_body,
    parse_query,
)


def _claim_message(claim: RewardClaimSchema) -> str:
    if claim.level == 7:
        return (
            f"Your Heaven 7 {claim.amount} has been claimed! "
            "Our team will review and process it shortly."
        )
    return (
        f"Your Heaven {claim.level} prize ({claim.amount}) has been claimed! "
        "Our team will review and process it shortly."
    )


async def create_claim_handler(request: web.Request) -> web.Response:
    """POST /network/claims"""
    body = await parse_body(request, ClaimRequest)
    service = RewardClaimService(get_session(request))

    claim = await service.claim_reward(body.member_id, body.level)

    data = RewardClaimSchema.model_validate(claim)
    return json_success(data, status=201, message=_claim_message(data))


async def member_claims_handler(request: web.Request) -> web.Response:
    """GET /network/claims?memberId=<id>"""
    query = parse_query(request, MemberClaimsQuery)
    service = RewardClaimService(get_session(request))

    claims = await service.list_member_claims(query.member_id)

    return json_success(
        [RewardClaimSchema.model_validate(claim) for claim in claims]
    )


async def admin_claims_handler(request: web.Request) -> web.Response:
    """GET /admin/claims?status=<status>"""
    query = parse_query(request, AdminClaimsQuery)
    service = RewardClaimService(get_session(request))

    listing = await service.list_claims(query.status)

    return json_success(
        AdminClaimListSchema(
            claims=[
                AdminRewardClaimSchema.from_claim(claim)
                for claim in listing.claims
            ],
            pending_count=listing.pending_count,
        )
    )


async def update_claim_handler(request: web.Request) -> web.Response:
    """PUT /admin/claims/{claim_id}"""
    claim_id = match_int(request, "claim_id")
    body = await parse_body(request, ClaimStatusUpdateRequest)
    service = RewardClaimService(get_session(request))

    claim = await service.update_claim_status(claim_id, body.status, body.note)

    return json_success(AdminRewardClaimSchema.from_claim(claim))
