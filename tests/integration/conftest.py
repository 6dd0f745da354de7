"""
Shared fixtures for integration tests.

- Seeded referral networks
- aiohttp test client over the in-memory database
"""

import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from heaven_club.web.app import create_app


@pytest_asyncio.fixture
async def five_by_one_network(make_member, add_recruits):
    """
    Root club member with 5 direct referrals, each with one referral.

    Returns:
        Tuple of (root, level 1 members, level 2 members)
    """
    root = await make_member(name="Root Leader")
    level1 = await add_recruits(root, 5)
    level2 = []
    for member in level1:
        level2.extend(await add_recruits(member, 1, club=False))
    return root, level1, level2


@pytest_asyncio.fixture
async def client(session_maker):
    """HTTP client for the API backed by the test database."""
    app = create_app(session_maker)
    async with TestClient(TestServer(app)) as client:
        yield client
