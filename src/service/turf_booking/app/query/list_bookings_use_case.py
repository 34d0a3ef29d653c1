from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.dto.booking_detail import BookingDetail
from src.service.turf_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.turf_booking.domain.entity.user_entity import UserEntity


class ListBookingsUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io(truncate_content=True)
    async def execute(self, *, requester: UserEntity) -> List[BookingDetail]:
        """Owners see bookings on their venues, everyone else sees their own"""
        if requester.is_owner:
            return await self.booking_query_repo.list_for_owner(owner_id=requester.id)
        return await self.booking_query_repo.list_for_user(user_id=requester.id)
