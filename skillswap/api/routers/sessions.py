"""
Session API endpoints.

Routes:
- POST /sessions - Schedule a session
- GET /sessions - List sessions across the caller's exchanges
- GET /sessions/{id} - Get one session
- PUT /sessions/{id} - Update a session (completion cascades onto the exchange)

Dependencies: skillswap.application.services.session_service, skillswap.models
System role: Session scheduling HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from skillswap.api.deps.dependencies import get_current_user_id, get_session_service
from skillswap.api.routers.router_utils import handle_service_errors
from skillswap.application.services.session_service import SessionService
from skillswap.models.session import (
    CreateSessionRequest,
    SessionListItem,
    SessionResponse,
    UpdateSessionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=201)
@handle_service_errors
async def create_session(
    request: CreateSessionRequest,
    user_id: int = Depends(get_current_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Schedule a session under an exchange.

    Args:
        request: CreateSessionRequest with exchangeId, scheduledTime, duration
        user_id: Authenticated caller
        session_service: Injected SessionService

    Returns:
        SessionResponse: Created session

    Raises:
        HTTPException(403): Caller not a participant
        HTTPException(404): Exchange not found
        HTTPException(409): Exchange already completed or cancelled
    """
    session = await session_service.schedule_session(
        actor_id=user_id,
        exchange_id=request.exchange_id,
        scheduled_time=request.scheduled_time,
        duration=request.duration,
        notes=request.notes,
    )
    return SessionResponse(**session)


@router.get("", response_model=list[SessionListItem])
@handle_service_errors
async def list_sessions(
    user_id: int = Depends(get_current_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> list[SessionListItem]:
    """List the caller's sessions, soonest first and unscheduled last."""
    sessions = await session_service.list_for_user(user_id)
    return [SessionListItem(**s) for s in sessions]


@router.get("/{session_id}", response_model=SessionResponse)
@handle_service_errors
async def get_session(
    session_id: int,
    user_id: int = Depends(get_current_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """Get a session of one of the caller's exchanges."""
    session = await session_service.get_session(session_id, user_id)
    return SessionResponse(**session)


@router.put("/{session_id}", response_model=SessionResponse)
@handle_service_errors
async def update_session(
    session_id: int,
    request: UpdateSessionRequest,
    user_id: int = Depends(get_current_user_id),
    session_service: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """
    Update a session.

    Completing a session counts towards the exchange and completes the
    exchange when it was the last one.

    Raises:
        HTTPException(403): Caller not a participant
        HTTPException(404): Session not found
        HTTPException(409): Transition not allowed or exchange closed
    """
    session = await session_service.update_session(
        session_id,
        user_id,
        status=request.status,
        scheduled_time=request.scheduled_time,
        duration=request.duration,
        notes=request.notes,
    )
    return SessionResponse(**session)
