"""
Referral network endpoints.

Read-only views: leaders list, member dashboard and drill-down graph.
"""

from aiohttp import web

from heaven_club.schemas.network import (
    LeaderSchema,
    LeadersQuery,
    MemberNetworkSchema,
    MemberSchema,
    NetworkGraphQuery,
    NetworkGraphSchema,
    NetworkNodeSchema,
    NetworkStatsSchema,
)
from heaven_club.services.network.aggregator import NetworkAggregator
from heaven_club.web.keys import get_session
from heaven_club.web.responses import json_success, match_int, parse_query


async def leaders_handler(request: web.Request) -> web.Response:
    """
    GET /network/leaders

    Returns:
        Every club member with team counts and tier progress
    """
    query = parse_query(request, LeadersQuery)
    aggregator = NetworkAggregator(get_session(request))

    leaders = await aggregator.list_leaders(query.search)

    return json_success([LeaderSchema.from_summary(item) for item in leaders])


async def graph_handler(request: web.Request) -> web.Response:
    """
    GET /network/graph?targetUserId=<id>&depth=<n>

    Returns:
        Stats and nested tree of one member
    """
    query = parse_query(request, NetworkGraphQuery)
    aggregator = NetworkAggregator(get_session(request))

    summary = await aggregator.get_member_summary(query.target_user_id)
    tree = await aggregator.get_network_tree(query.target_user_id, query.depth)

    return json_success(
        NetworkGraphSchema(
            member=MemberSchema.model_validate(summary.member),
            stats=NetworkStatsSchema.from_summary(summary),
            tree=NetworkNodeSchema.from_node(tree),
        )
    )


async def member_network_handler(request: web.Request) -> web.Response:
    """
    GET /network/members/{member_id}

    Returns:
        Dashboard of one member with direct referrals
    """
    member_id = match_int(request, "member_id")
    aggregator = NetworkAggregator(get_session(request))

    detail = await aggregator.get_member_network(member_id)

    return json_success(MemberNetworkSchema.from_detail(detail))
