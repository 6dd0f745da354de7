"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- Mock database session
- TreeTraversalEngine and TierEvaluator instances
- Sample referral adjacency maps
"""

from unittest.mock import AsyncMock

import pytest

from heaven_club.services.network.tiers import TierEvaluator
from heaven_club.services.network.traversal import TreeTraversalEngine


@pytest.fixture
def mock_session():
    """
    Mock async database session.

    Returns:
        AsyncMock: Mocked async session for database operations
    """
    return AsyncMock()


@pytest.fixture
def traversal_engine():
    """Traversal engine with the production tier depth and small caps."""
    return TreeTraversalEngine(tier_depth=7, max_depth=64, max_nodes=10_000)


@pytest.fixture
def evaluator():
    """Tier evaluator over the configured tiers."""
    return TierEvaluator()


@pytest.fixture
def five_by_one_tree():
    """
    Root 1 with 5 direct referrals, each with one referral.

    Level 1 = 5 members, level 2 = 5 members.
    """
    children = {1: [2, 3, 4, 5, 6]}
    for offset, parent in enumerate(range(2, 7)):
        children[parent] = [7 + offset]
    return children

