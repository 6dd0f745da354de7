"""
Unit tests for request/response schemas and the JSON envelope.

Tests cover:
- camelCase field names in and out
- Progress rounding to one decimal
- Drill-down node fields
- Success and error envelopes
- Exception to HTTP status mapping
"""

import json
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from heaven_club.models import Member
from heaven_club.schemas.network import (
    AdminClaimsQuery,
    ClaimRequest,
    LeaderSchema,
    LevelProgressSchema,
    NetworkGraphQuery,
    NetworkNodeSchema,
    RegisterMemberRequest,
)
from heaven_club.services.network.aggregator import (
    MemberNetworkSummary,
    NetworkTreeNode,
)
from heaven_club.services.network.tiers import LevelProgress, TierEvaluator
from heaven_club.services.network.traversal import NetworkCounts
from heaven_club.utils.exceptions import (
    DataIntegrityError,
    DuplicateClaimError,
    InvalidReferralCodeError,
    NetworkServiceError,
    NotFoundError,
    TierNotCompletedError,
)
from heaven_club.web.middlewares import status_for
from heaven_club.web.responses import json_error, json_success


def build_member(member_id: int, club: bool = True) -> Member:
    """Transient member with every field set."""
    return Member(
        id=member_id,
        full_name=f"Member {member_id}",
        email=f"member{member_id}@example.com",
        phone=None,
        referral_code=f"7HTEST{member_id:04d}",
        recruiter_id=None,
        is_club_member=club,
        is_admin=False,
        created_at=datetime(2026, 3, 14, 9, 30, tzinfo=UTC),
    )


class TestRequestSchemas:
    """Test request parsing."""

    def test_claim_request_accepts_camel_case(self):
        """Body keys arrive in camelCase."""
        body = ClaimRequest.model_validate({"memberId": 3, "level": 1})

        assert body.member_id == 3
        assert body.level == 1

    def test_graph_query_from_query_string(self):
        """Query string values are coerced to integers."""
        query = NetworkGraphQuery.model_validate(
            {"targetUserId": "12", "depth": "3"}
        )

        assert query.target_user_id == 12
        assert query.depth == 3

    def test_graph_query_requires_target(self):
        """targetUserId is mandatory."""
        with pytest.raises(ValidationError):
            NetworkGraphQuery.model_validate({})

    def test_admin_claims_status_filter(self):
        """Unknown claim status is rejected."""
        assert AdminClaimsQuery.model_validate({"status": "PENDING"}).status == "PENDING"

        with pytest.raises(ValidationError):
            AdminClaimsQuery.model_validate({"status": "LOST"})

    def test_register_member_email_format(self):
        """Malformed email is rejected."""
        with pytest.raises(ValidationError):
            RegisterMemberRequest.model_validate(
                {"fullName": "Asha", "email": "not-an-email"}
            )

    def test_register_member_strips_whitespace(self):
        """String fields are stripped."""
        body = RegisterMemberRequest.model_validate(
            {"fullName": "  Asha  ", "referralCode": " 7HABC "}
        )

        assert body.full_name == "Asha"
        assert body.referral_code == "7HABC"
        assert body.join_club is False


class TestResponseSchemas:
    """Test response serialization."""

    def test_progress_rounded_to_one_decimal(self):
        """Progress is rounded only when serialized."""
        item = LevelProgress(
            level=3, count=1, target=3, progress=100 / 3, complete=False, reward="x"
        )

        data = LevelProgressSchema.from_progress(item).to_json()

        assert data["progress"] == 33.3

    def test_leader_keys_are_camel_case(self):
        """Leader rows carry member fields and nested stats."""
        counts = NetworkCounts(
            level_counts=(5, 5, 0, 0, 0, 0, 0), total_team_all_depths=10
        )
        summary = MemberNetworkSummary(
            member=build_member(1),
            counts=counts,
            tiers=TierEvaluator().evaluate(counts),
        )

        data = LeaderSchema.from_summary(summary).to_json()

        assert data["fullName"] == "Member 1"
        assert data["isClubMember"] is True
        stats = data["stats"]
        assert stats["levelCounts"] == [5, 5, 0, 0, 0, 0, 0]
        assert stats["totalTeamAllDepths"] == 10
        assert stats["totalTeamWithinTierDepth"] == 10
        assert stats["level1Count"] == 5
        assert stats["level7Count"] == 0
        assert stats["level7Progress"] == 0.0
        assert stats["completedLevels"] == [1]
        assert set(stats["oddLevelProgress"]) == {"level1", "level3", "level5", "level7"}
        assert stats["oddLevelProgress"]["level1"]["complete"] is True

    def test_network_node(self):
        """Tree nodes report status, team size and next target."""
        root = NetworkTreeNode(member=build_member(1), level=0)
        child = NetworkTreeNode(member=build_member(2, club=False), level=1)
        root.children.append(child)
        root.direct_referral_count = 1

        data = NetworkNodeSchema.from_node(root).to_json()

        assert data["status"] == "ACTIVE"
        assert data["joinedAt"] == "2026-03-14"
        assert data["teamSize"] == 1
        assert data["nextLevelTarget"] == 5
        assert data["children"][0]["status"] == "DORMANT"
        assert data["children"][0]["nextLevelTarget"] == 25
        assert data["children"][0]["children"] == []


class TestEnvelope:
    """Test JSON envelope helpers."""

    def test_success_without_message(self):
        """Message key is omitted when not given."""
        response = json_success({"value": 1})

        assert response.status == 200
        assert json.loads(response.text) == {"success": True, "data": {"value": 1}}

    def test_success_with_message(self):
        """Message and status are passed through."""
        response = json_success([], status=201, message="Created")

        body = json.loads(response.text)
        assert response.status == 201
        assert body["message"] == "Created"
        assert body["data"] == []

    def test_error(self):
        """Errors carry a machine readable code."""
        response = json_error("Member 5 not found", "not_found", 404)

        assert response.status == 404
        assert json.loads(response.text) == {
            "success": False,
            "error": "Member 5 not found",
            "errorCode": "not_found",
        }


class TestStatusMapping:
    """Test exception to HTTP status mapping."""

    @pytest.mark.parametrize(
        "exc, status",
        [
            (NotFoundError("x"), 404),
            (DataIntegrityError("x"), 500),
            (InvalidReferralCodeError("x"), 404),
            (DuplicateClaimError("x"), 409),
            (TierNotCompletedError("x"), 403),
            (NetworkServiceError("x"), 500),
        ],
    )
    def test_status_for(self, exc, status):
        """Each error type maps to its HTTP status."""
        assert status_for(exc) == status
