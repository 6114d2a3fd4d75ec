"""
Skill API endpoints.

Routes:
- GET /skills - Caller's skills
- POST /skills - Add a skill
- PUT /skills/{id} - Edit a skill

Dependencies: skillswap.application.services.skill_service, skillswap.models
System role: Skill listing HTTP API
"""

from fastapi import APIRouter, Depends

from skillswap.api.deps.dependencies import get_current_user_id, get_skill_service
from skillswap.api.routers.router_utils import handle_service_errors
from skillswap.application.services.skill_service import SkillService
from skillswap.models.skill import CreateSkillRequest, SkillResponse, UpdateSkillRequest

router = APIRouter(prefix="/skills", tags=["skills"])


@router.get("", response_model=list[SkillResponse])
@handle_service_errors
async def list_skills(
    user_id: int = Depends(get_current_user_id),
    skill_service: SkillService = Depends(get_skill_service),
) -> list[SkillResponse]:
    skills = await skill_service.list_for_user(user_id)
    return [SkillResponse(**s) for s in skills]


@router.post("", response_model=SkillResponse, status_code=201)
@handle_service_errors
async def create_skill(
    request: CreateSkillRequest,
    user_id: int = Depends(get_current_user_id),
    skill_service: SkillService = Depends(get_skill_service),
) -> SkillResponse:
    """Add a teaching or learning skill for the caller."""
    skill = await skill_service.create_skill(
        user_id=user_id,
        name=request.name,
        is_teaching=request.is_teaching,
        proficiency_level=request.proficiency_level,
    )
    return SkillResponse(**skill)


@router.put("/{skill_id}", response_model=SkillResponse)
@handle_service_errors
async def update_skill(
    skill_id: int,
    request: UpdateSkillRequest,
    user_id: int = Depends(get_current_user_id),
    skill_service: SkillService = Depends(get_skill_service),
) -> SkillResponse:
    """
    Edit the caller's skill.

    Raises:
        HTTPException(400): Attempt to change isTeaching
        HTTPException(403): Skill belongs to another user
        HTTPException(404): Skill not found
    """
    skill = await skill_service.update_skill(
        skill_id,
        user_id,
        name=request.name,
        proficiency_level=request.proficiency_level,
        is_teaching=request.is_teaching,
    )
    return SkillResponse(**skill)
