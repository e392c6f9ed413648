"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, row factories, fixed clock, API client helpers
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite, fastapi
System role: Test infrastructure and fixture management
"""

import random
import uuid
from datetime import datetime, timezone

import pytest


FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from mathprep.boundary.db.base import Base
    import mathprep.boundary.db.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed aware UTC instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def make_profile(test_async_db):
    """Factory inserting a profile row."""
    from mathprep.boundary.db.CRUD import profile_crud

    async def _make(username: str | None = None, **fields):
        profile = await profile_crud.create(
            test_async_db,
            id=fields.pop("id", uuid.uuid4()),
            username=username or f"user-{uuid.uuid4().hex[:6]}",
            **fields,
        )
        await test_async_db.commit()
        return profile

    return _make


@pytest.fixture
def make_question(test_async_db):
    """Factory inserting a question row with sensible defaults."""
    from mathprep.boundary.db.CRUD import question_crud

    async def _make(**fields):
        values = {
            "question_text": "What is 2 + 2?",
            "options": ["3", "4", "5", "6"],
            "answer": "4",
            "division": "Algebra",
            "topic": "Arithmetic",
            "difficulty": 5,
        }
        values.update(fields)
        question = await question_crud.create(test_async_db, **values)
        await test_async_db.commit()
        return question

    return _make


@pytest.fixture
def user_headers():
    """Identity headers for a random caller."""
    user_id = uuid.uuid4()
    return {"X-User-ID": str(user_id)}
