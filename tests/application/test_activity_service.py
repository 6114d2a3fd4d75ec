"""Test suite for ActivityService: point credits, levels and leaderboard."""

import pytest

from skillswap.application.services.activity_service import ActivityService
from skillswap.boundary.db.CRUD import exchange_crud, user_crud
from skillswap.boundary.db.models.activity_model import ActivityType
from skillswap.core.exceptions import InvalidInputError, NotFoundError
from skillswap.core.state_machine import ExchangeStatus


@pytest.fixture
def activity_service(test_async_db) -> ActivityService:
    return ActivityService(test_async_db)


class TestLogActivity:
    """Test suite for ActivityService.log_activity()."""

    async def test_credits_points(self, test_async_db, activity_service, make_user) -> None:
        user = await make_user("dana")

        activity = await activity_service.log_activity(user.id, ActivityType.EXCHANGE, "Did a thing", 40)
        await test_async_db.commit()

        refreshed = await user_crud.get_by_id(test_async_db, user.id)
        assert activity["points_earned"] == 40
        assert refreshed.points == 40
        assert refreshed.level == 1

    async def test_level_recomputed_at_threshold(self, test_async_db, activity_service, make_user) -> None:
        user = await make_user("dana", points=450)

        await activity_service.log_activity(user.id, ActivityType.EXCHANGE, "Big one", 100)
        await test_async_db.commit()

        refreshed = await user_crud.get_by_id(test_async_db, user.id)
        assert refreshed.points == 550
        assert refreshed.level == 2

    async def test_zero_points_is_log_only(self, test_async_db, activity_service, make_user) -> None:
        user = await make_user("dana")

        await activity_service.log_activity(user.id, ActivityType.EXCHANGE, "Requested")
        await test_async_db.commit()

        refreshed = await user_crud.get_by_id(test_async_db, user.id)
        assert refreshed.points == 0
        assert len(await activity_service.list_for_user(user.id)) == 1

    async def test_negative_points_rejected(self, activity_service, make_user) -> None:
        user = await make_user("dana")

        with pytest.raises(InvalidInputError):
            await activity_service.log_activity(user.id, ActivityType.EXCHANGE, "Nope", -5)

    async def test_unknown_user(self, activity_service) -> None:
        with pytest.raises(NotFoundError):
            await activity_service.log_activity(999, ActivityType.EXCHANGE, "Ghost", 10)


class TestLeaderboard:
    """Test suite for ActivityService.leaderboard()."""

    async def test_ranked_by_points_with_completed_count(
        self, test_async_db, activity_service, swap_pair, make_user
    ) -> None:
        # Arrange
        await make_user("carol", points=900)
        await user_crud.add_points(test_async_db, swap_pair.bob.id, 300)
        await exchange_crud.create(
            test_async_db,
            teacher_id=swap_pair.bob.id,
            student_id=swap_pair.alice.id,
            teacher_skill_id=swap_pair.bob_js.id,
            student_skill_id=swap_pair.alice_python.id,
            status=ExchangeStatus.COMPLETED,
            sessions_completed=3,
            total_sessions=3,
        )
        await test_async_db.commit()

        # Act
        board = await activity_service.leaderboard()

        # Assert
        assert [row["username"] for row in board] == ["carol", "bob", "alice"]
        completed = {row["username"]: row["completed_exchanges"] for row in board}
        assert completed == {"carol": 0, "bob": 1, "alice": 1}
        assert "email" not in board[0]

    async def test_limit(self, activity_service, swap_pair) -> None:
        assert len(await activity_service.leaderboard(limit=1)) == 1
