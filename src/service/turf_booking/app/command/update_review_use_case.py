from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_review_repo import IReviewRepo
from src.service.turf_booking.domain.entity.review_entity import Review
from src.service.turf_booking.domain.entity.user_entity import UserEntity


class UpdateReviewUseCase:
    """Only the author may edit a review"""

    def __init__(self, *, review_repo: IReviewRepo) -> None:
        self.review_repo = review_repo

    @classmethod
    @inject
    def depends(
        cls,
        review_repo: IReviewRepo = Depends(Provide[Container.review_repo]),
    ) -> Self:
        return cls(review_repo=review_repo)

    @Logger.io
    async def execute(
        self,
        *,
        review_id: UUID,
        rating: int,
        comment: str,
        is_anonymous: bool,
        requester: UserEntity,
    ) -> Review:
        review = await self.review_repo.get_by_id(review_id=review_id)
        if review is None:
            raise NotFoundError('Review not found')
        if not review.is_written_by(requester.id):
            raise ForbiddenError('Only the author can edit this review')

        revised = review.revise(rating=rating, comment=comment, is_anonymous=is_anonymous)
        return await self.review_repo.update(review=revised)
