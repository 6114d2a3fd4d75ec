"""
Test suite for UserCRUD and SkillCRUD queries.

System role: Verification of point accrual and skill lookups
"""

import pytest

from skillswap.boundary.db.CRUD import skill_crud, user_crud


class TestAddPoints:
    """Test suite for UserCRUD.add_points()."""

    async def test_increments_in_database(self, test_async_db, make_user) -> None:
        user = await make_user("carol")

        await user_crud.add_points(test_async_db, user.id, 100)
        updated = await user_crud.add_points(test_async_db, user.id, 250)

        assert updated.points == 350

    async def test_unknown_user_returns_none(self, test_async_db) -> None:
        assert await user_crud.add_points(test_async_db, 404, 10) is None

    async def test_negative_points_rejected(self, test_async_db, make_user) -> None:
        user = await make_user("dave")
        with pytest.raises(ValueError):
            await user_crud.add_points(test_async_db, user.id, -1)

    async def test_get_by_points_orders_descending(self, test_async_db, make_user) -> None:
        low = await make_user("low")
        high = await make_user("high")
        await user_crud.add_points(test_async_db, high.id, 900)

        users = await user_crud.get_by_points(test_async_db)

        assert [u.id for u in users] == [high.id, low.id]


class TestSkillQueries:
    """Test suite for SkillCRUD lookups."""

    async def test_find_by_name_excludes_requester(self, test_async_db, swap_pair) -> None:
        skills = await skill_crud.find_by_name(
            test_async_db, "Python", is_teaching=True, exclude_user_id=swap_pair.alice.id
        )
        assert skills == []

    async def test_find_by_name_filters_side(self, test_async_db, swap_pair) -> None:
        learners = await skill_crud.find_by_name(test_async_db, "Python", is_teaching=False)
        assert [s.id for s in learners] == [swap_pair.bob_wants_python.id]

    async def test_get_by_user_filter(self, test_async_db, swap_pair) -> None:
        teaching = await skill_crud.get_by_user(test_async_db, swap_pair.alice.id, is_teaching=True)
        assert [s.name for s in teaching] == ["Python"]

    async def test_get_many(self, test_async_db, swap_pair) -> None:
        ids = [swap_pair.alice_python.id, swap_pair.bob_js.id, swap_pair.bob_js.id, 999]
        found = await skill_crud.get_many(test_async_db, ids)
        assert set(found) == {swap_pair.alice_python.id, swap_pair.bob_js.id}
