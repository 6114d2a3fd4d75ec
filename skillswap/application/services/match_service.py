"""
Skill match finder.

Finds users whose skills complement the requester's in both directions:
they teach what the requester wants to learn and want to learn what the
requester teaches.

Dependencies: skillswap.boundary.db.CRUD, skillswap.core.matching,
    skillswap.application.services.review_service
System role: Match candidate computation (pure read)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.application.services.review_service import ReviewService
from skillswap.boundary.db.CRUD.skill_crud import skill_crud
from skillswap.boundary.db.CRUD.user_crud import user_crud
from skillswap.boundary.db.models.skill_model import SkillModel
from skillswap.core.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from skillswap.core.matching import compute_match_percentage, rank_candidates

logger = logging.getLogger(__name__)


class MatchService:
    """Skill match finder service."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize match service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db
        self.reviews = ReviewService(db)

    async def _get_owned_skill(self, skill_id: int, user_id: int) -> SkillModel:
        skill = await skill_crud.get_by_id(self.db, skill_id)
        if skill is None:
            raise NotFoundError("skill", skill_id)
        if skill.user_id != user_id:
            raise ForbiddenError(f"Skill {skill_id} does not belong to the requester", actor_id=user_id)
        return skill

    async def find_matches(
        self,
        user_id: int,
        teaching_skill_id: int,
        learning_skill_id: int,
    ) -> list[dict]:
        """
        Rank users with a mutual skill fit.

        Args:
            user_id: Requesting user
            teaching_skill_id: Requester's teaching skill
            learning_skill_id: Requester's learning skill

        Returns:
            list[dict]: Candidates with user_id, username, name, avatar, university,
                rating, teaching_skill (what they teach), learning_skill (what they
                want to learn) and match_percentage; best match first, one entry
                per user

        Raises:
            NotFoundError: Either skill id does not resolve
            ForbiddenError: Either skill belongs to someone else
            InvalidInputError: teaching_skill_id is a learning record or vice versa
        """
        my_teaching = await self._get_owned_skill(teaching_skill_id, user_id)
        my_learning = await self._get_owned_skill(learning_skill_id, user_id)

        if not my_teaching.is_teaching:
            raise InvalidInputError("teachingSkillId is not a teaching skill", field="teachingSkillId")
        if my_learning.is_teaching:
            raise InvalidInputError("learningSkillId is not a learning skill", field="learningSkillId")

        # Users who teach what I want to learn, first teaching record per user
        teachers: dict[int, SkillModel] = {}
        for skill in await skill_crud.find_by_name(
            self.db, my_learning.name, is_teaching=True, exclude_user_id=user_id
        ):
            teachers.setdefault(skill.user_id, skill)

        # ...and who want to learn what I teach
        learners: dict[int, SkillModel] = {}
        for skill in await skill_crud.find_by_name(
            self.db, my_teaching.name, is_teaching=False, exclude_user_id=user_id
        ):
            learners.setdefault(skill.user_id, skill)

        mutual_ids = [uid for uid in teachers if uid in learners]
        users = await user_crud.get_many(self.db, mutual_ids)

        candidates = []
        for candidate_id in mutual_ids:
            user = users.get(candidate_id)
            if user is None:
                continue
            their_teaching = teachers[candidate_id]
            their_learning = learners[candidate_id]
            rating = await self.reviews.get_user_rating(candidate_id)
            candidates.append(
                {
                    "user_id": candidate_id,
                    "username": user.username,
                    "name": user.name,
                    "avatar": user.avatar,
                    "university": user.university,
                    "rating": rating["rating"],
                    "teaching_skill": {"id": their_teaching.id, "name": their_teaching.name},
                    "learning_skill": {"id": their_learning.id, "name": their_learning.name},
                    "match_percentage": compute_match_percentage(candidate_id),
                }
            )

        logger.info(
            "Matches computed",
            extra={
                "user_id": user_id,
                "teaching_skill": my_teaching.name,
                "learning_skill": my_learning.name,
                "candidates": len(candidates),
            },
        )
        return rank_candidates(candidates)
