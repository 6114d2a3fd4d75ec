"""
Test suite for MatchService.

System role: Verification of mutual skill matching
"""

import pytest

from skillswap.application.services.match_service import MatchService
from skillswap.boundary.db.CRUD import exchange_crud, review_crud
from skillswap.core.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from skillswap.core.matching import compute_match_percentage


@pytest.fixture
def match_service(test_async_db) -> MatchService:
    return MatchService(test_async_db)


class TestFindMatches:
    """Test suite for MatchService.find_matches()."""

    async def test_complementary_user_is_returned(self, match_service, swap_pair) -> None:
        # Act
        matches = await match_service.find_matches(
            swap_pair.alice.id, swap_pair.alice_python.id, swap_pair.alice_wants_js.id
        )

        # Assert
        assert len(matches) == 1
        match = matches[0]
        assert match["user_id"] == swap_pair.bob.id
        assert match["username"] == "bob"
        assert match["teaching_skill"] == {"id": swap_pair.bob_js.id, "name": "JavaScript"}
        assert match["learning_skill"] == {"id": swap_pair.bob_wants_python.id, "name": "Python"}
        assert match["match_percentage"] == compute_match_percentage(swap_pair.bob.id)
        assert match["rating"] == 0

    async def test_one_directional_fit_is_dropped(self, match_service, swap_pair, make_user, make_skill) -> None:
        # carol teaches JavaScript but wants Rust, not Python
        carol = await make_user("carol")
        await make_skill(carol, "JavaScript", True)
        await make_skill(carol, "Rust", False)

        matches = await match_service.find_matches(
            swap_pair.alice.id, swap_pair.alice_python.id, swap_pair.alice_wants_js.id
        )

        assert [m["user_id"] for m in matches] == [swap_pair.bob.id]

    async def test_duplicate_skill_records_yield_one_entry(self, match_service, swap_pair, make_skill) -> None:
        await make_skill(swap_pair.bob, "JavaScript", True, proficiency_level="expert")
        await make_skill(swap_pair.bob, "Python", False)

        matches = await match_service.find_matches(
            swap_pair.alice.id, swap_pair.alice_python.id, swap_pair.alice_wants_js.id
        )

        assert len(matches) == 1
        assert matches[0]["teaching_skill"]["id"] == swap_pair.bob_js.id

    async def test_requester_never_matches_self(self, match_service, swap_pair, make_skill) -> None:
        await make_skill(swap_pair.alice, "JavaScript", True)
        await make_skill(swap_pair.alice, "Python", False)

        matches = await match_service.find_matches(
            swap_pair.alice.id, swap_pair.alice_python.id, swap_pair.alice_wants_js.id
        )

        assert swap_pair.alice.id not in {m["user_id"] for m in matches}

    async def test_ranked_by_match_percentage(self, match_service, swap_pair, make_user, make_skill) -> None:
        for name in ("carol", "dave", "erin"):
            user = await make_user(name)
            await make_skill(user, "JavaScript", True)
            await make_skill(user, "Python", False)

        matches = await match_service.find_matches(
            swap_pair.alice.id, swap_pair.alice_python.id, swap_pair.alice_wants_js.id
        )

        scores = [m["match_percentage"] for m in matches]
        assert scores == sorted(scores, reverse=True)
        assert len(matches) == 4

    async def test_rating_attached(self, test_async_db, match_service, swap_pair) -> None:
        exchange = await exchange_crud.create(
            test_async_db,
            teacher_id=swap_pair.bob.id,
            student_id=swap_pair.alice.id,
            teacher_skill_id=swap_pair.bob_js.id,
            student_skill_id=swap_pair.alice_python.id,
        )
        for rating in (4, 5):
            await review_crud.create(
                test_async_db,
                exchange_id=exchange.id,
                reviewer_id=swap_pair.alice.id,
                reviewed_user_id=swap_pair.bob.id,
                rating=rating,
            )
        await test_async_db.commit()

        matches = await match_service.find_matches(
            swap_pair.alice.id, swap_pair.alice_python.id, swap_pair.alice_wants_js.id
        )

        assert matches[0]["rating"] == 4.5


class TestFindMatchesRejections:
    """Test suite for find_matches() precondition failures."""

    async def test_unknown_skill(self, match_service, swap_pair) -> None:
        with pytest.raises(NotFoundError):
            await match_service.find_matches(swap_pair.alice.id, 999, swap_pair.alice_wants_js.id)

    async def test_skill_of_another_user(self, match_service, swap_pair) -> None:
        with pytest.raises(ForbiddenError):
            await match_service.find_matches(
                swap_pair.alice.id, swap_pair.bob_js.id, swap_pair.alice_wants_js.id
            )

    async def test_swapped_skill_kinds(self, match_service, swap_pair) -> None:
        with pytest.raises(InvalidInputError):
            await match_service.find_matches(
                swap_pair.alice.id, swap_pair.alice_wants_js.id, swap_pair.alice_python.id
            )
