from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_review_repo import IReviewRepo
from src.service.turf_booking.domain.entity.review_entity import Review
from src.service.turf_booking.driven_adapter.model.review_model import ReviewModel
from src.service.turf_booking.driven_adapter.repo.entity_mapper import to_review
from src.service.turf_booking.driven_adapter.repo.sqlalchemy_repo_base import SqlAlchemyRepoBase


class ReviewRepoImpl(SqlAlchemyRepoBase, IReviewRepo):
    @Logger.io
    async def create(self, *, review: Review) -> Review:
        async with self._write_session(f'create review for booking {review.booking_id}') as session:
            try:
                await session.execute(
                    insert(ReviewModel).values(
                        id=review.id,
                        user_id=review.user_id,
                        venue_id=review.venue_id,
                        booking_id=review.booking_id,
                        rating=review.rating,
                        comment=review.comment,
                        reviewer_name=review.reviewer_name,
                        is_anonymous=review.is_anonymous,
                        is_verified=review.is_verified,
                        created_at=review.created_at,
                        updated_at=review.updated_at,
                    )
                )
            except IntegrityError as e:
                # Unique booking_id: a concurrent submit won
                raise ConflictError('Review already exists for this booking') from e
            return review

    @Logger.io
    async def get_by_id(self, *, review_id: UUID) -> Optional[Review]:
        async with self._get_session() as session:
            db_review = await session.get(ReviewModel, review_id)
            return to_review(db_review) if db_review else None

    @Logger.io
    async def get_by_booking(self, *, booking_id: UUID) -> Optional[Review]:
        async with self._get_session() as session:
            result = await session.execute(
                select(ReviewModel).where(ReviewModel.booking_id == booking_id)
            )
            db_review = result.scalar_one_or_none()
            return to_review(db_review) if db_review else None

    @Logger.io(truncate_content=True)
    async def list_reviews(
        self,
        *,
        venue_id: Optional[int] = None,
        user_id: Optional[int] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[List[Review], int]:
        filters = []
        if venue_id is not None:
            filters.append(ReviewModel.venue_id == venue_id)
        if user_id is not None:
            filters.append(ReviewModel.user_id == user_id)

        async with self._get_session() as session:
            total = await session.scalar(
                select(func.count()).select_from(ReviewModel).where(*filters)
            )
            result = await session.execute(
                select(ReviewModel)
                .where(*filters)
                .order_by(ReviewModel.created_at.desc())
                .offset(offset)
                .limit(limit)
            )
            return [to_review(db_review) for db_review in result.scalars().all()], total or 0

    @Logger.io
    async def rating_stats(self, *, venue_id: int) -> tuple[Optional[float], int]:
        async with self._get_session() as session:
            result = await session.execute(
                select(func.avg(ReviewModel.rating), func.count(ReviewModel.id)).where(
                    ReviewModel.venue_id == venue_id
                )
            )
            average, count = result.one()
            return (float(average) if average is not None else None), count

    @Logger.io
    async def update(self, *, review: Review) -> Review:
        async with self._write_session(f'update review {review.id}') as session:
            await session.execute(
                update(ReviewModel)
                .where(ReviewModel.id == review.id)
                .values(
                    rating=review.rating,
                    comment=review.comment,
                    is_anonymous=review.is_anonymous,
                    updated_at=review.updated_at,
                )
                .execution_options(synchronize_session=False)
            )
            return review

    @Logger.io
    async def delete(self, *, review_id: UUID) -> bool:
        async with self._write_session(f'delete review {review_id}') as session:
            result = await session.execute(
                delete(ReviewModel).where(ReviewModel.id == review_id).returning(ReviewModel.id)
            )
            return result.scalar_one_or_none() is not None
