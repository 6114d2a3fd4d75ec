"""
Test suite for SessionCRUD and the generic BaseCRUD helpers it inherits.

Runs against an in-memory SQLite database.

System role: Verification of session persistence
"""

import pytest

from skillswap.boundary.db.CRUD import exchange_crud, session_crud, user_crud
from skillswap.core.state_machine import SessionStatus


@pytest.fixture
async def session_row(test_async_db, swap_pair):
    exchange = await exchange_crud.create(
        test_async_db,
        teacher_id=swap_pair.bob.id,
        student_id=swap_pair.alice.id,
        teacher_skill_id=swap_pair.bob_js.id,
        student_skill_id=swap_pair.alice_python.id,
    )
    row = await session_crud.create(test_async_db, exchange_id=exchange.id, duration=60)
    await test_async_db.commit()
    return row


class TestSessionCRUD:
    """Test suite for SessionCRUD conditional writes."""

    async def test_defaults(self, session_row) -> None:
        assert session_row.status == SessionStatus.SCHEDULED
        assert session_row.whiteboard_data is None

    async def test_transition_writes_changes_together(self, test_async_db, session_row) -> None:
        won = await session_crud.transition_status(
            test_async_db,
            session_row.id,
            SessionStatus.SCHEDULED,
            SessionStatus.COMPLETED,
            notes="done early",
        )

        refreshed = await session_crud.get_by_id(test_async_db, session_row.id)
        assert won is True
        assert refreshed.status == SessionStatus.COMPLETED
        assert refreshed.notes == "done early"

    async def test_stale_transition_leaves_row_alone(self, test_async_db, session_row) -> None:
        await session_crud.transition_status(
            test_async_db, session_row.id, SessionStatus.SCHEDULED, SessionStatus.CANCELLED
        )

        won = await session_crud.transition_status(
            test_async_db, session_row.id, SessionStatus.SCHEDULED, SessionStatus.COMPLETED, notes="x"
        )

        refreshed = await session_crud.get_by_id(test_async_db, session_row.id)
        assert won is False
        assert refreshed.status == SessionStatus.CANCELLED
        assert refreshed.notes is None

    async def test_update_whiteboard(self, test_async_db, session_row) -> None:
        board = {"strokes": [{"x": 1, "y": 2}], "color": "#000"}

        assert await session_crud.update_whiteboard(test_async_db, session_row.id, board) is True
        assert await session_crud.update_whiteboard(test_async_db, 999, board) is False

        refreshed = await session_crud.get_by_id(test_async_db, session_row.id)
        assert refreshed.whiteboard_data == board

    async def test_get_by_exchange(self, test_async_db, session_row) -> None:
        rows = await session_crud.get_by_exchange(test_async_db, session_row.exchange_id)

        assert [s.id for s in rows] == [session_row.id]
        assert await session_crud.get_by_exchange(test_async_db, 999) == []

    async def test_get_by_exchanges(self, test_async_db, session_row) -> None:
        assert [s.id for s in await session_crud.get_by_exchanges(test_async_db, [session_row.exchange_id])] == [
            session_row.id
        ]
        assert await session_crud.get_by_exchanges(test_async_db, []) == []


class TestBaseCRUDHelpers:
    """Test suite for the generic lookups shared by every CRUD class."""

    async def test_get_many_skips_unknown_ids(self, test_async_db, swap_pair) -> None:
        users = await user_crud.get_many(test_async_db, [swap_pair.alice.id, 999, swap_pair.alice.id])

        assert list(users) == [swap_pair.alice.id]

    async def test_exists(self, test_async_db, swap_pair) -> None:
        assert await user_crud.exists(test_async_db, swap_pair.bob.id) is True
        assert await user_crud.exists(test_async_db, 999) is False

    async def test_update_by_id(self, test_async_db, swap_pair) -> None:
        user = await user_crud.update_by_id(test_async_db, swap_pair.bob.id, university="Tech")

        assert user.university == "Tech"
        assert await user_crud.update_by_id(test_async_db, 999, university="Tech") is None
