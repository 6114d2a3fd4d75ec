"""
Skill service orchestrator.

Dependencies: skillswap.boundary.db.CRUD
System role: Skill listing maintenance for the owning user
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.boundary.db.CRUD.skill_crud import skill_crud
from skillswap.boundary.db.models.skill_model import SkillModel
from skillswap.core.exceptions import ForbiddenError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def skill_to_dict(skill: SkillModel) -> dict:
    return {
        "id": skill.id,
        "user_id": skill.user_id,
        "name": skill.name,
        "is_teaching": skill.is_teaching,
        "proficiency_level": skill.proficiency_level,
        "is_verified": skill.is_verified,
    }


class SkillService:
    """Skill service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_for_user(self, user_id: int) -> list[dict]:
        """The user's teaching and learning skills."""
        skills = await skill_crud.get_by_user(self.db, user_id)
        return [skill_to_dict(s) for s in skills]

    async def create_skill(
        self,
        user_id: int,
        name: str,
        is_teaching: bool,
        proficiency_level: str = "beginner",
    ) -> dict:
        """
        Add a teaching or learning skill for the user.

        Args:
            user_id: Owner
            name: Skill name
            is_teaching: True for "can teach", False for "wants to learn"
            proficiency_level: Self-assessed level

        Returns:
            dict: Created skill
        """
        name = name.strip()
        if not name:
            raise InvalidInputError("Skill name is required", field="name")

        skill = await skill_crud.create(
            self.db,
            user_id=user_id,
            name=name,
            is_teaching=is_teaching,
            proficiency_level=proficiency_level,
        )
        await self.db.commit()

        logger.info(
            "Skill created",
            extra={"skill_id": skill.id, "user_id": user_id, "is_teaching": is_teaching},
        )
        return skill_to_dict(skill)

    async def update_skill(
        self,
        skill_id: int,
        user_id: int,
        name: str | None = None,
        proficiency_level: str | None = None,
        is_teaching: bool | None = None,
    ) -> dict:
        """
        Edit a skill's name or proficiency.

        The teaching/learning flag is fixed at creation; sending the
        current value is accepted, a different one is rejected.

        Raises:
            NotFoundError: Unknown skill
            ForbiddenError: Skill belongs to another user
            InvalidInputError: Attempt to flip is_teaching or blank name
        """
        skill = await skill_crud.get_by_id(self.db, skill_id)
        if skill is None:
            raise NotFoundError("skill", skill_id)
        if skill.user_id != user_id:
            raise ForbiddenError("Cannot modify another user's skill", actor_id=user_id)
        if is_teaching is not None and is_teaching != skill.is_teaching:
            raise InvalidInputError("isTeaching cannot be changed after creation", field="isTeaching")

        changes = {}
        if name is not None:
            if not name.strip():
                raise InvalidInputError("Skill name is required", field="name")
            changes["name"] = name.strip()
        if proficiency_level is not None:
            changes["proficiency_level"] = proficiency_level

        if changes:
            skill = await skill_crud.update_by_id(self.db, skill_id, **changes)
            await self.db.commit()
            logger.info("Skill updated", extra={"skill_id": skill_id, "fields": list(changes)})

        return skill_to_dict(skill)
