"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory async database, user/skill factories, bearer tokens,
fake realtime transport and storage.
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import os

os.environ.setdefault("AUTH_JWT_SECRET", "test-secret-key-that-is-at-least-32-bytes")
os.environ.setdefault("POSTGRES_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any

import pytest

from skillswap.core.exceptions import NotFoundError


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from skillswap.boundary.db.base import Base
    import skillswap.boundary.db.models  # noqa: F401

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
        autoflush=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def make_user(test_async_db):
    """Factory creating a committed user."""
    from skillswap.boundary.db.CRUD import user_crud

    async def _make(username: str, **kwargs: Any):
        user = await user_crud.create(
            test_async_db,
            username=username,
            name=kwargs.pop("name", username.title()),
            email=kwargs.pop("email", f"{username}@example.edu"),
            **kwargs,
        )
        await test_async_db.commit()
        return user

    return _make


@pytest.fixture
def make_skill(test_async_db):
    """Factory creating a committed skill."""
    from skillswap.boundary.db.CRUD import skill_crud

    async def _make(user, name: str, is_teaching: bool, **kwargs: Any):
        skill = await skill_crud.create(
            test_async_db,
            user_id=user.id,
            name=name,
            is_teaching=is_teaching,
            **kwargs,
        )
        await test_async_db.commit()
        return skill

    return _make


@pytest.fixture
async def swap_pair(make_user, make_skill) -> SimpleNamespace:
    """
    Two users with complementary skills.

    alice teaches Python and wants JavaScript; bob teaches JavaScript and
    wants Python.
    """
    alice = await make_user("alice", university="State University")
    bob = await make_user("bob")
    return SimpleNamespace(
        alice=alice,
        bob=bob,
        alice_python=await make_skill(alice, "Python", True),
        alice_wants_js=await make_skill(alice, "JavaScript", False),
        bob_js=await make_skill(bob, "JavaScript", True),
        bob_wants_python=await make_skill(bob, "Python", False),
    )


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a user id."""
    from skillswap.core.security import create_access_token

    def _headers(user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers


class FakeHandle:
    """Connection handle recording every frame it is asked to send."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[dict] = []
        self.fail = fail

    async def send_json(self, data: Any) -> None:
        if self.fail:
            raise ConnectionError("socket closed")
        self.sent.append(data)

    def of_type(self, event_type: str) -> list[dict]:
        return [frame for frame in self.sent if frame["type"] == event_type]


class FakeRealtimeStore:
    """In-memory stand-in for RealtimeStore."""

    def __init__(self, participants: dict[int, set[int]] | None = None) -> None:
        # session_id -> user ids allowed to join
        self.participants = participants or {}
        self.whiteboards: dict[int, Any] = {}
        self.messages: list[dict] = []

    async def get_user_profile(self, user_id: int) -> dict | None:
        return {"id": user_id, "username": f"user{user_id}", "name": f"User {user_id}"}

    async def is_session_participant(self, session_id: int, user_id: int) -> bool:
        if session_id not in self.participants:
            raise NotFoundError("session", session_id)
        return user_id in self.participants[session_id]

    async def save_whiteboard(self, session_id: int, whiteboard_data: Any) -> None:
        self.whiteboards[session_id] = whiteboard_data

    async def create_direct_message(self, sender_id: int, receiver_id: int, content: str) -> dict:
        message = {
            "id": len(self.messages) + 1,
            "sender_id": sender_id,
            "receiver_id": receiver_id,
            "content": content,
            "sent_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        self.messages.append(message)
        return message


@pytest.fixture
def fake_store() -> FakeRealtimeStore:
    """Sessions 10 (users 1, 2, 3) and 20 (users 1, 4)."""
    return FakeRealtimeStore({10: {1, 2, 3}, 20: {1, 4}})


@pytest.fixture
def new_handle():
    """Factory for FakeHandle instances."""
    def _new(fail: bool = False) -> FakeHandle:
        return FakeHandle(fail=fail)

    return _new
