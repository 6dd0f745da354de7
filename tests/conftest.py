"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment for settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("LOG_FILE", "")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import itertools

import pytest
import pytest_asyncio
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from heaven_club.models import Base, Member


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine with the schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False
    )


@pytest_asyncio.fixture
async def session(session_maker):
    """Database session for one test."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def make_member(session):
    """
    Factory creating committed members.

    Usage:
        root = await make_member()
        child = await make_member(recruiter=root, club=False)
    """
    counter = itertools.count(1)

    async def _make(
        recruiter: Member | None = None,
        club: bool = True,
        name: str | None = None,
        email: str | None = None,
        referral_code: str | None = None,
    ) -> Member:
        n = next(counter)
        member = Member(
            full_name=name or f"Member {n}",
            email=email or f"member{n}@example.com",
            referral_code=referral_code or f"7HTEST{n:04d}",
            recruiter_id=recruiter.id if recruiter else None,
            is_club_member=club,
        )
        session.add(member)
        await session.commit()
        return member

    return _make


@pytest.fixture
def add_recruits(make_member):
    """Factory adding several direct recruits under one member."""

    async def _add(recruiter: Member, count: int, club: bool = True) -> list[Member]:
        return [await make_member(recruiter=recruiter, club=club) for _ in range(count)]

    return _add


@pytest.fixture
def insert_raw_edges(session):
    """
    Insert members with explicit IDs and recruiter IDs.

    Bypasses the ORM so corrupted graphs (cycles, missing recruiters) can be
    stored. SQLite does not enforce foreign keys by default.
    """

    async def _insert(edges: list[tuple[int, int | None]], club: bool = True) -> None:
        await session.execute(
            insert(Member),
            [
                {
                    "id": member_id,
                    "full_name": f"Raw {member_id}",
                    "email": f"raw{member_id}@example.com",
                    "referral_code": f"7HRAW{member_id:04d}",
                    "recruiter_id": recruiter_id,
                    "is_club_member": club,
                }
                for member_id, recruiter_id in edges
            ],
        )
        await session.commit()

    return _insert
