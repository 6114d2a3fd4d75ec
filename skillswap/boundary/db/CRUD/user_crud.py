"""
User CRUD operations.

Dependencies: sqlalchemy, skillswap.boundary.db.models
System role: User lookups and atomic point accrual
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.boundary.db.models.user_model import UserModel
from skillswap.boundary.db.CRUD.base_crud import BaseCRUD


class UserCRUD(BaseCRUD[UserModel]):
    """
    CRUD operations for UserModel.

    Extends BaseCRUD with point accrual and leaderboard ordering.
    """

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)

    async def add_points(
        self,
        session: AsyncSession,
        id: int,
        points: int,
    ) -> UserModel | None:
        """
        Atomically add points to a user.

        Uses an in-database increment so concurrent awards never lose
        an update.

        Args:
            session: Async database session
            id: User id
            points: Points to add (must be non-negative)

        Returns:
            Updated UserModel if found, None otherwise
        """
        if points < 0:
            raise ValueError("points must be non-negative")
        updated = await self.update_where(session, id, points=UserModel.points + points)
        if not updated:
            return None
        return await self.get_by_id(session, id)

    async def set_level(self, session: AsyncSession, id: int, level: int) -> None:
        """
        Store a recomputed level.

        Args:
            session: Async database session
            id: User id
            level: New level
        """
        await self.update_where(session, id, level=level)

    async def get_by_points(
        self,
        session: AsyncSession,
        limit: int | None = None,
    ) -> Sequence[UserModel]:
        """
        Retrieve users ordered by points, highest first.

        Args:
            session: Async database session
            limit: Maximum number of users to return

        Returns:
            Sequence of UserModels
        """
        stmt = select(UserModel).order_by(UserModel.points.desc(), UserModel.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


user_crud = UserCRUD()
