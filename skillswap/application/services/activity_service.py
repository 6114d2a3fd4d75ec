"""
Activity service orchestrator.

Appends activity log entries and accrues the attached points onto the
user, keeping level in step with points.

Dependencies: skillswap.boundary.db.CRUD, skillswap.core.levels, skillswap.configs
System role: Activity collaborator (point accrual hook) and leaderboard
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.boundary.db.CRUD.activity_crud import activity_crud
from skillswap.boundary.db.CRUD.exchange_crud import exchange_crud
from skillswap.boundary.db.CRUD.user_crud import user_crud
from skillswap.boundary.db.models.activity_model import ActivityModel, ActivityType
from skillswap.configs import get_settings
from skillswap.core.exceptions import InvalidInputError, NotFoundError
from skillswap.core.levels import level_for_points

logger = logging.getLogger(__name__)


def activity_to_dict(activity: ActivityModel) -> dict:
    return {
        "id": activity.id,
        "user_id": activity.user_id,
        "type": activity.type,
        "description": activity.description,
        "points_earned": activity.points_earned,
        "created_at": activity.created_at,
    }


class ActivityService:
    """Activity service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize activity service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def log_activity(
        self,
        user_id: int,
        activity_type: ActivityType,
        description: str,
        points: int = 0,
    ) -> dict:
        """
        Append an activity and credit its points.

        Runs inside the caller's transaction; the caller commits.

        Args:
            user_id: User the entry belongs to
            activity_type: ActivityType
            description: Human-readable summary
            points: Points to credit (0 for a pure log entry)

        Returns:
            dict: Created activity

        Raises:
            InvalidInputError: If points is negative
            NotFoundError: If the user does not exist
        """
        if points < 0:
            raise InvalidInputError("Activity points cannot be negative", field="points")

        activity = await activity_crud.create(
            self.db,
            user_id=user_id,
            type=activity_type,
            description=description,
            points_earned=points,
        )

        if points > 0:
            user = await user_crud.add_points(self.db, user_id, points)
            if user is None:
                raise NotFoundError("user", user_id)

            level = level_for_points(user.points, get_settings().exchange.points_per_level)
            if level != user.level:
                await user_crud.set_level(self.db, user_id, level)
                logger.info(
                    "User levelled up",
                    extra={"user_id": user_id, "level": level, "points": user.points},
                )

            logger.info(
                "Points awarded",
                extra={
                    "user_id": user_id,
                    "points": points,
                    "total_points": user.points,
                    "activity_type": activity_type.value,
                },
            )

        return activity_to_dict(activity)

    async def list_for_user(self, user_id: int, limit: int | None = None) -> list[dict]:
        """
        Get a user's activity log, newest first.

        Args:
            user_id: User id
            limit: Maximum number of entries

        Returns:
            list[dict]: Activity dicts
        """
        activities = await activity_crud.get_by_user(self.db, user_id, limit=limit)
        return [activity_to_dict(a) for a in activities]

    async def leaderboard(self, limit: int | None = 50) -> list[dict]:
        """
        Rank users by points.

        Args:
            limit: Maximum number of rows

        Returns:
            list[dict]: Public profiles with completed_exchanges count, highest points first
        """
        users = await user_crud.get_by_points(self.db, limit=limit)
        completed = await exchange_crud.count_completed_by_user(self.db)
        return [
            {**user.public_profile(), "completed_exchanges": completed.get(user.id, 0)}
            for user in users
        ]
