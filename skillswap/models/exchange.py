"""
Exchange schemas.

Dependencies: pydantic
System role: Exchange API contracts
"""

from datetime import datetime

from pydantic import Field

from skillswap.core.state_machine import ExchangeStatus
from skillswap.models.common import CamelModel, UserProfile
from skillswap.models.skill import SkillResponse


class CreateExchangeRequest(CamelModel):
    """Request schema for opening an exchange."""

    teacher_id: int
    student_id: int
    teacher_skill_id: int
    student_skill_id: int
    total_sessions: int | None = Field(default=None, ge=1)


class UpdateExchangeRequest(CamelModel):
    """Request schema for an exchange status change."""

    status: ExchangeStatus


class ExchangeResponse(CamelModel):
    """Response schema for an exchange."""

    id: int
    teacher_id: int
    student_id: int
    teacher_skill_id: int
    student_skill_id: int
    status: ExchangeStatus
    sessions_completed: int
    total_sessions: int
    created_at: datetime
    updated_at: datetime


class ExchangeDetailResponse(ExchangeResponse):
    """Exchange with both skills and both public profiles attached."""

    teacher_skill: SkillResponse | None = None
    student_skill: SkillResponse | None = None
    teacher_user: UserProfile | None = None
    student_user: UserProfile | None = None
