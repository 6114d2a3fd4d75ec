"""
Skill CRUD operations.

Provides the skill queries the match finder runs.

Dependencies: sqlalchemy, skillswap.boundary.db.models
System role: Skill persistence operations
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.boundary.db.models.skill_model import SkillModel
from skillswap.boundary.db.CRUD.base_crud import BaseCRUD


class SkillCRUD(BaseCRUD[SkillModel]):
    """
    CRUD operations for SkillModel.

    Extends BaseCRUD with by-user and by-name lookups.
    """

    def __init__(self) -> None:
        """Initialize SkillCRUD with SkillModel."""
        super().__init__(SkillModel)

    async def get_by_user(
        self,
        session: AsyncSession,
        user_id: int,
        is_teaching: bool | None = None,
    ) -> Sequence[SkillModel]:
        """
        Retrieve a user's skills.

        Args:
            session: Async database session
            user_id: Owner id
            is_teaching: Restrict to teaching (True) or learning (False) records

        Returns:
            Sequence of SkillModels ordered by id
        """
        stmt = select(SkillModel).where(SkillModel.user_id == user_id)
        if is_teaching is not None:
            stmt = stmt.where(SkillModel.is_teaching == is_teaching)
        result = await session.execute(stmt.order_by(SkillModel.id))
        return result.scalars().all()

    async def find_by_name(
        self,
        session: AsyncSession,
        name: str,
        is_teaching: bool,
        exclude_user_id: int | None = None,
    ) -> Sequence[SkillModel]:
        """
        Retrieve skills with an exact name on one side (teaching or learning).

        Args:
            session: Async database session
            name: Skill name to match exactly
            is_teaching: Which side to search
            exclude_user_id: Owner to leave out (the requester)

        Returns:
            Sequence of SkillModels ordered by id
        """
        stmt = select(SkillModel).where(
            SkillModel.name == name,
            SkillModel.is_teaching == is_teaching,
        )
        if exclude_user_id is not None:
            stmt = stmt.where(SkillModel.user_id != exclude_user_id)
        result = await session.execute(stmt.order_by(SkillModel.id))
        return result.scalars().all()


skill_crud = SkillCRUD()
