"""
Skill match API endpoint.

Routes:
- POST /skill-matches - Rank users with a mutual skill fit

Dependencies: skillswap.application.services.match_service, skillswap.models
System role: Match finder HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from skillswap.api.deps.dependencies import get_current_user_id, get_match_service
from skillswap.api.routers.router_utils import handle_service_errors
from skillswap.application.services.match_service import MatchService
from skillswap.models.match import MatchCandidate, SkillMatchRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/skill-matches", tags=["matches"])


@router.post("", response_model=list[MatchCandidate])
@handle_service_errors
async def find_skill_matches(
    request: SkillMatchRequest,
    user_id: int = Depends(get_current_user_id),
    match_service: MatchService = Depends(get_match_service),
) -> list[MatchCandidate]:
    """
    Find users who teach what the caller wants to learn and want to learn what the caller teaches.

    Args:
        request: SkillMatchRequest with teachingSkillId, learningSkillId
        user_id: Authenticated caller
        match_service: Injected MatchService

    Returns:
        list[MatchCandidate]: Best match first

    Raises:
        HTTPException(400): Ids missing/non-numeric or wrong skill kinds
        HTTPException(403): Skill belongs to another user
        HTTPException(404): Skill not found
    """
    candidates = await match_service.find_matches(
        user_id=user_id,
        teaching_skill_id=request.teaching_skill_id,
        learning_skill_id=request.learning_skill_id,
    )
    return [MatchCandidate(**c) for c in candidates]
