"""
Dependency injection container.

Factory functions for FastAPI dependencies: bearer identity, services
bound to the request's database session, and the process-wide realtime
coordinator.

Dependencies: fastapi, skillswap.application, skillswap.boundary, skillswap.core
System role: DI container for service injection
"""

import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.application.services import (
    ActivityService,
    ExchangeService,
    MatchService,
    ReviewService,
    SessionService,
    SkillService,
)
from skillswap.boundary.db import get_async_db
from skillswap.core.exceptions import AuthenticationError
from skillswap.core.security import decode_access_token
from skillswap.core.session_coordinator import SessionCoordinator

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int:
    """
    Resolve the caller from the Authorization bearer token.

    Args:
        credentials: Parsed Authorization header (injected)

    Returns:
        int: Authenticated user id

    Raises:
        HTTPException(401): Missing, malformed or expired token
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return decode_access_token(credentials.credentials)
    except AuthenticationError as e:
        logger.warning("Rejected bearer token", extra={"error": e.message})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_match_service(db: AsyncSession = Depends(get_async_db)) -> MatchService:
    """
    Get match service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        MatchService: Match finder bound to the request session
    """
    return MatchService(db=db)


def get_exchange_service(db: AsyncSession = Depends(get_async_db)) -> ExchangeService:
    """
    Get exchange service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        ExchangeService: Exchange lifecycle manager
    """
    return ExchangeService(db=db)


def get_session_service(db: AsyncSession = Depends(get_async_db)) -> SessionService:
    """
    Get session service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        SessionService: Session scheduler
    """
    return SessionService(db=db)


def get_review_service(db: AsyncSession = Depends(get_async_db)) -> ReviewService:
    """Get review service instance."""
    return ReviewService(db=db)


def get_activity_service(db: AsyncSession = Depends(get_async_db)) -> ActivityService:
    """Get activity service instance."""
    return ActivityService(db=db)


def get_skill_service(db: AsyncSession = Depends(get_async_db)) -> SkillService:
    """Get skill service instance."""
    return SkillService(db=db)


def get_session_coordinator(request: Request) -> SessionCoordinator:
    """
    Get the application's realtime coordinator.

    Returns:
        SessionCoordinator: Instance created at startup (app.state.coordinator)
    """
    return request.app.state.coordinator
