from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.service.turf_booking.app.dto.review_page import (
    RatingSummary,
    ReviewEligibility,
    ReviewPage,
)
from src.service.turf_booking.domain.entity.review_entity import MAX_COMMENT_LENGTH, Review


class ReviewContent(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)
    is_anonymous: bool = False


class SubmitReviewRequest(ReviewContent):
    model_config = {
        'json_schema_extra': {
            'examples': [
                {
                    'booking_id': '01928f3e-5c1a-7d2b-9f00-3a1b2c3d4e5f',
                    'rating': 5,
                    'comment': 'Great turf, lights were bright for the evening game',
                }
            ]
        }
    }

    booking_id: UUID


class ReviewResponse(BaseModel):
    id: UUID
    user_id: Optional[int] = None  # hidden for anonymous reviews
    venue_id: int
    booking_id: UUID
    rating: int
    comment: str
    reviewer_name: str
    is_anonymous: bool
    is_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, review: Review) -> 'ReviewResponse':
        return cls(
            id=review.id,
            user_id=None if review.is_anonymous else review.user_id,
            venue_id=review.venue_id,
            booking_id=review.booking_id,
            rating=review.rating,
            comment=review.comment,
            reviewer_name=review.display_name,
            is_anonymous=review.is_anonymous,
            is_verified=review.is_verified,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class RatingSummaryResponse(BaseModel):
    average: float
    total: int

    @classmethod
    def from_summary(cls, summary: RatingSummary) -> 'RatingSummaryResponse':
        return cls(average=summary.average, total=summary.total)


class ReviewListResponse(BaseModel):
    reviews: List[ReviewResponse]
    pagination: PaginationResponse
    average_rating: Optional[RatingSummaryResponse] = None

    @classmethod
    def from_page(cls, page: ReviewPage) -> 'ReviewListResponse':
        return cls(
            reviews=[ReviewResponse.from_entity(review) for review in page.reviews],
            pagination=PaginationResponse(
                page=page.page, limit=page.limit, total=page.total, pages=page.pages
            ),
            average_rating=(
                RatingSummaryResponse.from_summary(page.rating) if page.rating else None
            ),
        )


class ReviewEligibilityResponse(BaseModel):
    can_review: bool
    has_review: bool
    slot_finished: bool
    review: Optional[ReviewResponse] = None

    @classmethod
    def from_eligibility(cls, eligibility: ReviewEligibility) -> 'ReviewEligibilityResponse':
        return cls(
            can_review=eligibility.can_review,
            has_review=eligibility.has_review,
            slot_finished=eligibility.slot_finished,
            review=ReviewResponse.from_entity(eligibility.review) if eligibility.review else None,
        )
