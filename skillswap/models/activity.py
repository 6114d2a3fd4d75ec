"""
Activity and leaderboard schemas.

Dependencies: pydantic
System role: Gamification API contracts
"""

from datetime import datetime

from skillswap.boundary.db.models.activity_model import ActivityType
from skillswap.models.common import CamelModel, UserProfile


class ActivityResponse(CamelModel):
    """Response schema for an activity log entry."""

    id: int
    user_id: int
    type: ActivityType
    description: str
    points_earned: int
    created_at: datetime


class LeaderboardEntry(UserProfile):
    """User card with number of completed exchanges."""

    completed_exchanges: int = 0
