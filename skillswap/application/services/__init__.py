"""
Application services.

Each service wraps one AsyncSession and commits its own unit of work.
RealtimeStore opens a session per call for the long-lived coordinator.
"""

from skillswap.application.services.activity_service import ActivityService
from skillswap.application.services.exchange_service import ExchangeService
from skillswap.application.services.match_service import MatchService
from skillswap.application.services.realtime_store import RealtimeStore
from skillswap.application.services.review_service import ReviewService
from skillswap.application.services.session_service import SessionService
from skillswap.application.services.skill_service import SkillService

__all__ = [
    "ActivityService",
    "ExchangeService",
    "MatchService",
    "RealtimeStore",
    "ReviewService",
    "SessionService",
    "SkillService",
]
