from typing import Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.dto.booking_detail import Receipt
from src.service.turf_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.turf_booking.domain.entity.user_entity import UserEntity


class GetReceiptUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def execute(self, *, booking_id: UUID, requester: UserEntity) -> Receipt:
        detail = await self.booking_query_repo.get_detail(booking_id=booking_id)
        if detail is None:
            raise NotFoundError('Booking not found')

        booking = detail.booking
        allowed = (
            requester.id == booking.user_id
            or requester.id == detail.venue_owner_id
            or requester.is_admin
        )
        if not allowed:
            raise ForbiddenError('You cannot view this receipt')

        return Receipt(
            booking_id=booking.id,
            payer_name=booking.payer_name,
            payer_email=booking.payer_email,
            venue_name=detail.venue_name,
            location=detail.venue_location,
            sport=detail.sport,
            date=detail.slot_date,
            time_slot=detail.time_range,
            advance_paid=booking.amount_received,
            remaining=booking.amount_remaining,
            total=booking.total_amount,
            booking_date=booking.created_at,
        )
