"""
Activity CRUD operations.

Dependencies: sqlalchemy, skillswap.boundary.db.models
System role: Activity log persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.boundary.db.models.activity_model import ActivityModel
from skillswap.boundary.db.CRUD.base_crud import BaseCRUD


class ActivityCRUD(BaseCRUD[ActivityModel]):
    """CRUD operations for ActivityModel."""

    def __init__(self) -> None:
        """Initialize ActivityCRUD with ActivityModel."""
        super().__init__(ActivityModel)

    async def get_by_user(
        self,
        session: AsyncSession,
        user_id: int,
        limit: int | None = None,
    ) -> Sequence[ActivityModel]:
        """
        Retrieve a user's activity log.

        Args:
            session: Async database session
            user_id: User id
            limit: Maximum number of entries

        Returns:
            Sequence of ActivityModels, newest first
        """
        stmt = (
            select(ActivityModel)
            .where(ActivityModel.user_id == user_id)
            .order_by(ActivityModel.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


activity_crud = ActivityCRUD()
