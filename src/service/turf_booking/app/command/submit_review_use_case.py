from datetime import datetime, timezone
from typing import Callable, Optional, Self
from uuid import UUID
from zoneinfo import ZoneInfo

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.turf_booking.app.interface.i_review_repo import IReviewRepo
from src.service.turf_booking.app.interface.i_slot_inventory_repo import ISlotInventoryRepo
from src.service.turf_booking.domain.entity.review_entity import Review
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.domain.enum.booking_status import BookingStatus


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SubmitReviewUseCase:
    """
    A player rates a venue after playing there.

    The booking must be the requester's own, still confirmed, and its slot must
    have ended in the venue timezone. One review per booking.
    """

    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        slot_inventory_repo: ISlotInventoryRepo,
        review_repo: IReviewRepo,
        clock: Callable[[], datetime] = _utc_now,
        venue_timezone: Optional[ZoneInfo] = None,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.slot_inventory_repo = slot_inventory_repo
        self.review_repo = review_repo
        self.clock = clock
        self.venue_timezone = venue_timezone or ZoneInfo(settings.VENUE_TIMEZONE)

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        slot_inventory_repo: ISlotInventoryRepo = Depends(Provide[Container.slot_inventory_repo]),
        review_repo: IReviewRepo = Depends(Provide[Container.review_repo]),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            slot_inventory_repo=slot_inventory_repo,
            review_repo=review_repo,
        )

    @Logger.io
    async def execute(
        self,
        *,
        booking_id: UUID,
        rating: int,
        comment: str,
        is_anonymous: bool,
        requester: UserEntity,
    ) -> Review:
        # Validates rating and comment before any lookup
        review = Review.create(
            user_id=requester.id,
            venue_id=0,
            booking_id=booking_id,
            rating=rating,
            comment=comment,
            reviewer_name=requester.name,
            is_anonymous=is_anonymous,
        )

        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if booking is None:
            raise NotFoundError('Booking not found')
        if booking.user_id != requester.id:
            raise ForbiddenError('You can only review your own bookings')
        if booking.status != BookingStatus.CONFIRMED:
            raise InvalidInputError('Only confirmed bookings can be reviewed')

        slot = await self.slot_inventory_repo.get_by_id(slot_id=booking.slot_id)
        if slot is None or not slot.has_ended(now=self.clock(), tz=self.venue_timezone):
            raise InvalidInputError('A booking can be reviewed once its slot has ended')

        if await self.review_repo.get_by_booking(booking_id=booking_id) is not None:
            raise ConflictError('Review already exists for this booking')

        created = await self.review_repo.create(
            review=attrs.evolve(review, venue_id=booking.venue_id)
        )
        Logger.base.info(
            f'⭐ [REVIEW] user={requester.id} venue={booking.venue_id} rating={rating}'
        )
        return created
