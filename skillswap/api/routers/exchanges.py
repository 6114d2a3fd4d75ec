"""
Exchange API endpoints.

Routes:
- POST /exchanges - Request an exchange
- GET /exchanges - List the caller's exchanges
- GET /exchanges/{id} - Get one exchange
- PUT /exchanges/{id} - Change exchange status

Dependencies: skillswap.application.services.exchange_service, skillswap.models
System role: Exchange lifecycle HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from skillswap.api.deps.dependencies import get_current_user_id, get_exchange_service
from skillswap.api.routers.router_utils import handle_service_errors
from skillswap.application.services.exchange_service import ExchangeService
from skillswap.models.exchange import (
    CreateExchangeRequest,
    ExchangeDetailResponse,
    ExchangeResponse,
    UpdateExchangeRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exchanges", tags=["exchanges"])


@router.post("", response_model=ExchangeResponse, status_code=201)
@handle_service_errors
async def create_exchange(
    request: CreateExchangeRequest,
    user_id: int = Depends(get_current_user_id),
    exchange_service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeResponse:
    """
    Request a skill exchange.

    Args:
        request: CreateExchangeRequest with teacherId, studentId, teacherSkillId,
            studentSkillId and optional totalSessions
        user_id: Authenticated caller (must be teacher or student)
        exchange_service: Injected ExchangeService

    Returns:
        ExchangeResponse: Created exchange in pending status

    Raises:
        HTTPException(400): Same user on both sides or skill ownership mismatch
        HTTPException(403): Caller is neither teacher nor student
        HTTPException(404): User or skill not found
    """
    exchange = await exchange_service.create_exchange(
        actor_id=user_id,
        teacher_id=request.teacher_id,
        student_id=request.student_id,
        teacher_skill_id=request.teacher_skill_id,
        student_skill_id=request.student_skill_id,
        total_sessions=request.total_sessions,
    )
    return ExchangeResponse(**exchange)


@router.get("", response_model=list[ExchangeDetailResponse])
@handle_service_errors
async def list_exchanges(
    user_id: int = Depends(get_current_user_id),
    exchange_service: ExchangeService = Depends(get_exchange_service),
) -> list[ExchangeDetailResponse]:
    """List the caller's exchanges with skills and counterpart profiles attached."""
    exchanges = await exchange_service.list_for_user(user_id)
    return [ExchangeDetailResponse(**e) for e in exchanges]


@router.get("/{exchange_id}", response_model=ExchangeResponse)
@handle_service_errors
async def get_exchange(
    exchange_id: int,
    user_id: int = Depends(get_current_user_id),
    exchange_service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeResponse:
    """Get an exchange the caller takes part in."""
    exchange = await exchange_service.get_exchange(exchange_id, user_id)
    return ExchangeResponse(**exchange)


@router.put("/{exchange_id}", response_model=ExchangeResponse)
@handle_service_errors
async def update_exchange(
    exchange_id: int,
    request: UpdateExchangeRequest,
    user_id: int = Depends(get_current_user_id),
    exchange_service: ExchangeService = Depends(get_exchange_service),
) -> ExchangeResponse:
    """
    Change an exchange's status.

    Args:
        exchange_id: Exchange id
        request: UpdateExchangeRequest with the new status
        user_id: Authenticated caller
        exchange_service: Injected ExchangeService

    Returns:
        ExchangeResponse: Updated exchange

    Raises:
        HTTPException(403): Caller not a participant
        HTTPException(404): Exchange not found
        HTTPException(409): Transition not allowed from the current status
    """
    exchange = await exchange_service.update_status(exchange_id, request.status, user_id)
    return ExchangeResponse(**exchange)
