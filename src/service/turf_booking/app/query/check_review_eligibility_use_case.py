from datetime import datetime, timezone
from typing import Callable, Optional, Self
from uuid import UUID
from zoneinfo import ZoneInfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.dto.review_page import ReviewEligibility
from src.service.turf_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.turf_booking.app.interface.i_review_repo import IReviewRepo
from src.service.turf_booking.app.interface.i_slot_inventory_repo import ISlotInventoryRepo
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.domain.enum.booking_status import BookingStatus


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CheckReviewEligibilityUseCase:
    """Tells a player whether their booking can be reviewed, and returns the review if any"""

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
    async def execute(self, *, booking_id: UUID, requester: UserEntity) -> ReviewEligibility:
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if booking is None:
            raise NotFoundError('Booking not found')
        if booking.user_id != requester.id:
            raise ForbiddenError('You can only check your own bookings')

        slot = await self.slot_inventory_repo.get_by_id(slot_id=booking.slot_id)
        finished = (
            booking.status == BookingStatus.CONFIRMED
            and slot is not None
            and slot.has_ended(now=self.clock(), tz=self.venue_timezone)
        )
        review = await self.review_repo.get_by_booking(booking_id=booking_id)
        return ReviewEligibility(
            can_review=finished and review is None,
            has_review=review is not None,
            slot_finished=finished,
            review=review,
        )
