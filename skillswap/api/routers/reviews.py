"""
Review API endpoints.

Routes:
- POST /reviews - Review an exchange partner
- GET /users/{id}/reviews - Reviews received by a user
- GET /users/{id}/rating - Aggregate rating of a user

Dependencies: skillswap.application.services.review_service, skillswap.models
System role: Review/rating HTTP API
"""

from fastapi import APIRouter, Depends

from skillswap.api.deps.dependencies import get_current_user_id, get_review_service
from skillswap.api.routers.router_utils import handle_service_errors
from skillswap.application.services.review_service import ReviewService
from skillswap.models.review import CreateReviewRequest, RatingResponse, ReviewResponse

router = APIRouter(tags=["reviews"])


@router.post("/reviews", response_model=ReviewResponse, status_code=201)
@handle_service_errors
async def create_review(
    request: CreateReviewRequest,
    user_id: int = Depends(get_current_user_id),
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    """
    Review the other participant of an exchange.

    Raises:
        HTTPException(400): Reviewing oneself
        HTTPException(403): Caller or reviewed user not in the exchange
        HTTPException(404): Exchange not found
    """
    review = await review_service.create_review(
        reviewer_id=user_id,
        exchange_id=request.exchange_id,
        reviewed_user_id=request.reviewed_user_id,
        rating=request.rating,
        comment=request.comment,
    )
    return ReviewResponse(**review)


@router.get("/users/{user_id}/reviews", response_model=list[ReviewResponse])
@handle_service_errors
async def list_user_reviews(
    user_id: int,
    _caller: int = Depends(get_current_user_id),
    review_service: ReviewService = Depends(get_review_service),
) -> list[ReviewResponse]:
    reviews = await review_service.list_reviews(user_id)
    return [ReviewResponse(**r) for r in reviews]


@router.get("/users/{user_id}/rating", response_model=RatingResponse)
@handle_service_errors
async def get_user_rating(
    user_id: int,
    _caller: int = Depends(get_current_user_id),
    review_service: ReviewService = Depends(get_review_service),
) -> RatingResponse:
    rating = await review_service.get_user_rating(user_id)
    return RatingResponse(**rating)
