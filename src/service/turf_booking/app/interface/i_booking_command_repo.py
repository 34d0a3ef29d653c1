from abc import ABC, abstractmethod
from uuid import UUID

from src.service.turf_booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """Insert the booking and point its slot at it in one transaction"""
        pass

    @abstractmethod
    async def delete(self, *, booking_id: UUID) -> bool:
        """
        Delete the booking and clear its slot's booking reference in one transaction

        Returns:
            False if the booking did not exist
        """
        pass

    @abstractmethod
    async def update_payment(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def delete_by_venue(self, *, venue_id: int) -> int:
        pass
