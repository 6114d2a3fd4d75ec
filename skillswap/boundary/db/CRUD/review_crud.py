"""
Review CRUD operations.

Dependencies: sqlalchemy, skillswap.boundary.db.models
System role: Review persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.boundary.db.models.review_model import ReviewModel
from skillswap.boundary.db.CRUD.base_crud import BaseCRUD


class ReviewCRUD(BaseCRUD[ReviewModel]):
    """CRUD operations for ReviewModel."""

    def __init__(self) -> None:
        """Initialize ReviewCRUD with ReviewModel."""
        super().__init__(ReviewModel)

    async def get_by_reviewed_user(
        self,
        session: AsyncSession,
        user_id: int,
    ) -> Sequence[ReviewModel]:
        """
        Retrieve reviews about a user.

        Args:
            session: Async database session
            user_id: Reviewed user id

        Returns:
            Sequence of ReviewModels, newest first
        """
        stmt = (
            select(ReviewModel)
            .where(ReviewModel.reviewed_user_id == user_id)
            .order_by(ReviewModel.id.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


review_crud = ReviewCRUD()
