"""
Review service orchestrator.

Aggregates ratings and records reviews between exchange participants.

Dependencies: skillswap.boundary.db.CRUD
System role: Review/rating aggregator
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.boundary.db.CRUD.exchange_crud import exchange_crud
from skillswap.boundary.db.CRUD.review_crud import review_crud
from skillswap.boundary.db.models.review_model import ReviewModel
from skillswap.core.exceptions import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    SkillSwapException,
)

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def review_to_dict(review: ReviewModel) -> dict:
    return {
        "id": review.id,
        "exchange_id": review.exchange_id,
        "reviewer_id": review.reviewer_id,
        "reviewed_user_id": review.reviewed_user_id,
        "rating": review.rating,
        "comment": review.comment,
        "created_at": review.created_at,
    }


class ReviewService:
    """Review service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize review service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def get_user_rating(self, user_id: int) -> dict:
        """
        Average rating received by a user.

        Args:
            user_id: Reviewed user id

        Returns:
            dict: {"rating": average rounded to one decimal, "count": number of reviews};
                  {"rating": 0, "count": 0} when there are none
        """
        reviews = await review_crud.get_by_reviewed_user(self.db, user_id)
        if not reviews:
            return {"rating": 0, "count": 0}

        total = sum(r.rating for r in reviews)
        return {"rating": round(total / len(reviews), 1), "count": len(reviews)}

    async def list_reviews(self, user_id: int) -> list[dict]:
        """Reviews received by a user, newest first."""
        reviews = await review_crud.get_by_reviewed_user(self.db, user_id)
        return [review_to_dict(r) for r in reviews]

    async def create_review(
        self,
        reviewer_id: int,
        exchange_id: int,
        reviewed_user_id: int,
        rating: int,
        comment: str | None = None,
    ) -> dict:
        """
        Record a review of one exchange participant by the other.

        Args:
            reviewer_id: Acting user
            exchange_id: Exchange the review is about
            reviewed_user_id: User being rated
            rating: 1..5
            comment: Optional free text

        Returns:
            dict: Created review

        Raises:
            InvalidInputError: Self-review or rating out of range
            NotFoundError: Unknown exchange
            ForbiddenError: Reviewer or reviewed user not a participant
        """
        try:
            if reviewer_id == reviewed_user_id:
                raise InvalidInputError("Users cannot review themselves", field="reviewedUserId")
            if not MIN_RATING <= rating <= MAX_RATING:
                raise InvalidInputError(
                    f"Rating must be between {MIN_RATING} and {MAX_RATING}",
                    field="rating",
                )

            exchange = await exchange_crud.get_by_id(self.db, exchange_id)
            if exchange is None:
                raise NotFoundError("exchange", exchange_id)
            if not exchange.has_participant(reviewer_id):
                raise ForbiddenError("Not a participant of this exchange", actor_id=reviewer_id)
            if not exchange.has_participant(reviewed_user_id):
                raise ForbiddenError(
                    "Reviewed user is not a participant of this exchange",
                    actor_id=reviewer_id,
                )

            review = await review_crud.create(
                self.db,
                exchange_id=exchange_id,
                reviewer_id=reviewer_id,
                reviewed_user_id=reviewed_user_id,
                rating=rating,
                comment=comment,
            )
            await self.db.commit()

            logger.info(
                "Review created",
                extra={
                    "review_id": review.id,
                    "exchange_id": exchange_id,
                    "reviewed_user_id": reviewed_user_id,
                    "rating": rating,
                },
            )
            return review_to_dict(review)
        except SkillSwapException as e:
            logger.warning(
                "Review rejected",
                extra={"error": e.message, "exchange_id": exchange_id, "reviewer_id": reviewer_id},
            )
            raise
