from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.turf_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.turf_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.turf_booking.domain.entity.booking_entity import Booking
from src.service.turf_booking.domain.entity.user_entity import UserEntity


class SettleBookingUseCase:
    """Venue owner records that the remaining balance was collected"""

    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        booking_command_repo: IBookingCommandRepo,
        venue_query_repo: IVenueQueryRepo,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.booking_command_repo = booking_command_repo
        self.venue_query_repo = venue_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            booking_command_repo=booking_command_repo,
            venue_query_repo=venue_query_repo,
        )

    @Logger.io
    async def execute(self, *, booking_id: UUID, requester: UserEntity) -> Booking:
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if booking is None:
            raise NotFoundError('Booking not found')
        venue = await self.venue_query_repo.get_by_id(venue_id=booking.venue_id)
        if venue is None or not venue.is_owned_by(requester.id):
            raise ForbiddenError('Only the venue owner can settle bookings')

        settled = await self.booking_command_repo.update_payment(booking=booking.settle())
        Logger.base.info(f'💰 [SETTLE] Booking {booking_id} marked as paid in full')
        return settled
