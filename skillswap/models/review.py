"""
Review schemas.

Dependencies: pydantic
System role: Review API contracts
"""

from datetime import datetime

from pydantic import Field

from skillswap.models.common import CamelModel


class CreateReviewRequest(CamelModel):
    """Request schema for reviewing an exchange partner."""

    exchange_id: int
    reviewed_user_id: int
    rating: int = Field(ge=1, le=5)
    comment: str | None = None


class ReviewResponse(CamelModel):
    """Response schema for a review."""

    id: int
    exchange_id: int
    reviewer_id: int
    reviewed_user_id: int
    rating: int
    comment: str | None = None
    created_at: datetime


class RatingResponse(CamelModel):
    """Aggregate rating for a user."""

    rating: float
    count: int
