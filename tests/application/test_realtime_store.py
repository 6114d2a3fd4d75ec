"""
Test suite for RealtimeStore, the coordinator's database port.

The store opens its own sessions; here they share the in-memory engine
behind test_async_db.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from skillswap.application.services.realtime_store import RealtimeStore
from skillswap.boundary.db.CRUD import exchange_crud, session_crud
from skillswap.core.exceptions import InvalidInputError, NotFoundError


@pytest.fixture
def store(test_async_db) -> RealtimeStore:
    factory = async_sessionmaker(test_async_db.bind, class_=AsyncSession, expire_on_commit=False)
    return RealtimeStore(session_factory=factory)


@pytest.fixture
async def live_session(test_async_db, swap_pair):
    exchange = await exchange_crud.create(
        test_async_db,
        teacher_id=swap_pair.bob.id,
        student_id=swap_pair.alice.id,
        teacher_skill_id=swap_pair.bob_js.id,
        student_skill_id=swap_pair.alice_python.id,
    )
    row = await session_crud.create(test_async_db, exchange_id=exchange.id)
    await test_async_db.commit()
    return row


class TestRealtimeStore:

    async def test_user_profile(self, store, swap_pair) -> None:
        profile = await store.get_user_profile(swap_pair.alice.id)

        assert profile["username"] == "alice"
        assert profile["university"] == "State University"
        assert await store.get_user_profile(999) is None

    async def test_session_participation(self, store, live_session, swap_pair, make_user) -> None:
        carol = await make_user("carol")

        assert await store.is_session_participant(live_session.id, swap_pair.alice.id) is True
        assert await store.is_session_participant(live_session.id, swap_pair.bob.id) is True
        assert await store.is_session_participant(live_session.id, carol.id) is False

    async def test_participation_unknown_session(self, store, swap_pair) -> None:
        with pytest.raises(NotFoundError):
            await store.is_session_participant(999, swap_pair.alice.id)

    async def test_save_whiteboard_last_writer_wins(self, test_async_db, store, live_session) -> None:
        await store.save_whiteboard(live_session.id, {"strokes": [1]})
        await store.save_whiteboard(live_session.id, {"strokes": [1, 2]})

        refreshed = await session_crud.get_by_id(test_async_db, live_session.id)
        assert refreshed.whiteboard_data == {"strokes": [1, 2]}

    async def test_save_whiteboard_unknown_session(self, store) -> None:
        with pytest.raises(NotFoundError):
            await store.save_whiteboard(999, {})

    async def test_direct_message(self, store, swap_pair) -> None:
        message = await store.create_direct_message(swap_pair.alice.id, swap_pair.bob.id, "hi bob")

        assert message["id"] is not None
        assert message["content"] == "hi bob"
        assert message["receiver_id"] == swap_pair.bob.id
        assert message["sent_at"] is not None

    async def test_direct_message_rejects_blank_and_unknown_receiver(self, store, swap_pair) -> None:
        with pytest.raises(InvalidInputError):
            await store.create_direct_message(swap_pair.alice.id, swap_pair.bob.id, "   ")
        with pytest.raises(NotFoundError):
            await store.create_direct_message(swap_pair.alice.id, 999, "hello?")
