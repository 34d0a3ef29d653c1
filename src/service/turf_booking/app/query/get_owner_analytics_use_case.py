from datetime import datetime, timezone
from typing import Callable, Optional, Self
from zoneinfo import ZoneInfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.turf_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.domain.revenue_analytics import OwnerAnalytics, summarize


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GetOwnerAnalyticsUseCase:
    """Revenue dashboard for a venue owner across all of their venues"""

    def __init__(
        self,
        *,
        venue_query_repo: IVenueQueryRepo,
        booking_query_repo: IBookingQueryRepo,
        clock: Callable[[], datetime] = _utc_now,
        venue_timezone: Optional[ZoneInfo] = None,
    ) -> None:
        self.venue_query_repo = venue_query_repo
        self.booking_query_repo = booking_query_repo
        self.clock = clock
        self.venue_timezone = venue_timezone or ZoneInfo(settings.VENUE_TIMEZONE)

    @classmethod
    @inject
    def depends(
        cls,
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(venue_query_repo=venue_query_repo, booking_query_repo=booking_query_repo)

    @Logger.io(truncate_content=True)
    async def execute(self, *, requester: UserEntity) -> OwnerAnalytics:
        venues = await self.venue_query_repo.list_by_owner(owner_id=requester.id)
        if not venues:
            return OwnerAnalytics.empty()

        details = await self.booking_query_repo.list_for_owner(owner_id=requester.id)
        return summarize(
            bookings=[detail.booking for detail in details],
            now=self.clock(),
            tz=self.venue_timezone,
        )
