from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.command.delete_review_use_case import DeleteReviewUseCase
from src.service.turf_booking.app.command.submit_review_use_case import SubmitReviewUseCase
from src.service.turf_booking.app.command.update_review_use_case import UpdateReviewUseCase
from src.service.turf_booking.app.query.check_review_eligibility_use_case import (
    CheckReviewEligibilityUseCase,
)
from src.service.turf_booking.app.query.list_reviews_use_case import (
    MAX_PAGE_SIZE,
    ListReviewsUseCase,
)
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from src.service.turf_booking.driving_adapter.http_controller.schema.review_schema import (
    ReviewContent,
    ReviewEligibilityResponse,
    ReviewListResponse,
    ReviewResponse,
    SubmitReviewRequest,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def submit_review(
    request: SubmitReviewRequest,
    current_user: UserEntity = Depends(get_current_user),
    use_case: SubmitReviewUseCase = Depends(SubmitReviewUseCase.depends),
) -> ReviewResponse:
    review = await use_case.execute(
        booking_id=request.booking_id,
        rating=request.rating,
        comment=request.comment,
        is_anonymous=request.is_anonymous,
        requester=current_user,
    )
    return ReviewResponse.from_entity(review)


@router.get('')
@Logger.io
async def list_reviews(
    venue_id: Optional[int] = None,
    user_id: Optional[int] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=MAX_PAGE_SIZE),
    use_case: ListReviewsUseCase = Depends(ListReviewsUseCase.depends),
) -> ReviewListResponse:
    """Public listing, newest first; with venue_id the average rating is included"""
    review_page = await use_case.execute(
        venue_id=venue_id, user_id=user_id, page=page, limit=limit
    )
    return ReviewListResponse.from_page(review_page)


@router.get('/check')
@Logger.io
async def check_review_eligibility(
    booking_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CheckReviewEligibilityUseCase = Depends(CheckReviewEligibilityUseCase.depends),
) -> ReviewEligibilityResponse:
    eligibility = await use_case.execute(booking_id=booking_id, requester=current_user)
    return ReviewEligibilityResponse.from_eligibility(eligibility)


@router.put('/{review_id}')
@Logger.io
async def update_review(
    review_id: UUID,
    request: ReviewContent,
    current_user: UserEntity = Depends(get_current_user),
    use_case: UpdateReviewUseCase = Depends(UpdateReviewUseCase.depends),
) -> ReviewResponse:
    review = await use_case.execute(
        review_id=review_id,
        rating=request.rating,
        comment=request.comment,
        is_anonymous=request.is_anonymous,
        requester=current_user,
    )
    return ReviewResponse.from_entity(review)


@router.delete('/{review_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_review(
    review_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: DeleteReviewUseCase = Depends(DeleteReviewUseCase.depends),
) -> None:
    await use_case.execute(review_id=review_id, requester=current_user)
