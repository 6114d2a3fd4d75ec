"""
Skill schemas.

Dependencies: pydantic
System role: Skill API contracts
"""

from pydantic import Field

from skillswap.models.common import CamelModel


class CreateSkillRequest(CamelModel):
    """Request schema for adding a skill."""

    name: str = Field(min_length=1, max_length=255)
    is_teaching: bool
    proficiency_level: str = Field(default="beginner", max_length=32)


class UpdateSkillRequest(CamelModel):
    """Request schema for editing a skill. is_teaching may only repeat the stored value."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    proficiency_level: str | None = Field(default=None, max_length=32)
    is_teaching: bool | None = None


class SkillResponse(CamelModel):
    """Response schema for a skill."""

    id: int
    user_id: int
    name: str
    is_teaching: bool
    proficiency_level: str
    is_verified: bool
