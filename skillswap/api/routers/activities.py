"""
Activity and leaderboard API endpoints.

Routes:
- GET /activities - Caller's activity log
- GET /leaderboard - Users ranked by points

Dependencies: skillswap.application.services.activity_service, skillswap.models
System role: Gamification HTTP API
"""

from fastapi import APIRouter, Depends, Query

from skillswap.api.deps.dependencies import get_activity_service, get_current_user_id
from skillswap.api.routers.router_utils import handle_service_errors
from skillswap.application.services.activity_service import ActivityService
from skillswap.models.activity import ActivityResponse, LeaderboardEntry

router = APIRouter(tags=["activities"])


@router.get("/activities", response_model=list[ActivityResponse])
@handle_service_errors
async def list_activities(
    limit: int | None = Query(default=None, ge=1, le=500),
    user_id: int = Depends(get_current_user_id),
    activity_service: ActivityService = Depends(get_activity_service),
) -> list[ActivityResponse]:
    """Caller's activity log, newest first."""
    activities = await activity_service.list_for_user(user_id, limit=limit)
    return [ActivityResponse(**a) for a in activities]


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
@handle_service_errors
async def get_leaderboard(
    limit: int = Query(default=50, ge=1, le=500),
    _caller: int = Depends(get_current_user_id),
    activity_service: ActivityService = Depends(get_activity_service),
) -> list[LeaderboardEntry]:
    """Users ordered by points with their completed exchange count."""
    rows = await activity_service.leaderboard(limit=limit)
    return [LeaderboardEntry(**row) for row in rows]
