from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.turf_booking.domain.entity.review_entity import Review


class IReviewRepo(ABC):
    @abstractmethod
    async def create(self, *, review: Review) -> Review:
        """Raises ConflictError when the booking already has a review"""
        pass

    @abstractmethod
    async def get_by_id(self, *, review_id: UUID) -> Optional[Review]:
        pass

    @abstractmethod
    async def get_by_booking(self, *, booking_id: UUID) -> Optional[Review]:
        pass

    @abstractmethod
    async def list_reviews(
        self,
        *,
        venue_id: Optional[int] = None,
        user_id: Optional[int] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[List[Review], int]:
        """
        Newest first

        Returns:
            (page of reviews, total matching the filters)
        """
        pass

    @abstractmethod
    async def rating_stats(self, *, venue_id: int) -> tuple[Optional[float], int]:
        """(mean rating or None, review count) over every review of the venue"""
        pass

    @abstractmethod
    async def update(self, *, review: Review) -> Review:
        pass

    @abstractmethod
    async def delete(self, *, review_id: UUID) -> bool:
        pass
