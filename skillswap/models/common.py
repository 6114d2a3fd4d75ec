"""
Common response models and utilities.

camelCase wire models and error schemas.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema serialized as camelCase.

    Input is accepted in either camelCase or snake_case.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Error response schema."""

    detail: str = Field(description="Error message")


class ValidationErrorResponse(BaseModel):
    """Request validation failure (400)."""

    detail: str = Field(description="Error message")
    errors: list[dict] = Field(default_factory=list, description="Field-level validation errors")


class UserProfile(CamelModel):
    """Public user card shared with other users."""

    id: int
    username: str
    name: str
    university: str | None = None
    avatar: str | None = None
    points: int = 0
    level: int = 1


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str
    realtime_connections: int
