from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_review_repo import IReviewRepo
from src.service.turf_booking.domain.entity.user_entity import UserEntity


class DeleteReviewUseCase:
    """The author or an admin removes a review"""

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
    async def execute(self, *, review_id: UUID, requester: UserEntity) -> None:
        review = await self.review_repo.get_by_id(review_id=review_id)
        if review is None:
            raise NotFoundError('Review not found')
        if not (review.is_written_by(requester.id) or requester.is_admin):
            raise ForbiddenError('Only the author or an admin can delete this review')

        if not await self.review_repo.delete(review_id=review_id):
            raise NotFoundError('Review not found')
        Logger.base.info(f'🗑️ [REVIEW] Review {review_id} deleted by user {requester.id}')
