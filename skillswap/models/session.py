"""
Session domain models and schemas.

Request/response schemas for session operations.

Dependencies: pydantic
System role: Session API contracts
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from skillswap.core.state_machine import ExchangeStatus, SessionStatus
from skillswap.models.common import CamelModel, UserProfile


class CreateSessionRequest(CamelModel):
    """Request schema for scheduling a session."""

    exchange_id: int
    scheduled_time: datetime | None = None
    duration: int | None = Field(default=None, gt=0, description="Minutes, defaults to 60")
    notes: str | None = None


class UpdateSessionRequest(CamelModel):
    """Request schema for updating a session."""

    status: SessionStatus | None = None
    scheduled_time: datetime | None = None
    duration: int | None = Field(default=None, gt=0)
    notes: str | None = None


class SessionResponse(CamelModel):
    """Response schema for session operations."""

    id: int
    exchange_id: int
    scheduled_time: datetime | None
    duration: int
    status: SessionStatus
    notes: str | None = None
    whiteboard_data: Any = None
    created_at: datetime
    updated_at: datetime


class ExchangeSummary(CamelModel):
    id: int
    status: ExchangeStatus


class SessionListItem(SessionResponse):
    """Session enriched for the caller's schedule view."""

    exchange: ExchangeSummary
    other_user: UserProfile | None = None
    is_teacher: bool
