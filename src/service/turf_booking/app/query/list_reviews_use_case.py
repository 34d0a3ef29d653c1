from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.dto.review_page import RatingSummary, ReviewPage
from src.service.turf_booking.app.interface.i_review_repo import IReviewRepo


MAX_PAGE_SIZE = 50


class ListReviewsUseCase:
    def __init__(self, *, review_repo: IReviewRepo) -> None:
        self.review_repo = review_repo

    @classmethod
    @inject
    def depends(
        cls,
        review_repo: IReviewRepo = Depends(Provide[Container.review_repo]),
    ) -> Self:
        return cls(review_repo=review_repo)

    @Logger.io(truncate_content=True)
    async def execute(
        self,
        *,
        venue_id: Optional[int] = None,
        user_id: Optional[int] = None,
        page: int = 1,
        limit: int = 10,
    ) -> ReviewPage:
        """Newest first; the rating summary is only computed for a single venue"""
        if page < 1:
            raise InvalidInputError('Page must be at least 1')
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise InvalidInputError(f'Limit must be between 1 and {MAX_PAGE_SIZE}')

        reviews, total = await self.review_repo.list_reviews(
            venue_id=venue_id, user_id=user_id, offset=(page - 1) * limit, limit=limit
        )

        rating = None
        if venue_id is not None:
            average, count = await self.review_repo.rating_stats(venue_id=venue_id)
            if average is not None and count > 0:
                rating = RatingSummary(average=round(average, 1), total=count)

        return ReviewPage(reviews=reviews, page=page, limit=limit, total=total, rating=rating)
