from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from src.service.turf_booking.app.dto.booking_detail import BookingDetail
from src.service.turf_booking.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def get_detail(self, *, booking_id: UUID) -> Optional[BookingDetail]:
        pass

    @abstractmethod
    async def list_for_user(self, *, user_id: int) -> List[BookingDetail]:
        """Newest first"""
        pass

    @abstractmethod
    async def list_for_owner(self, *, owner_id: int) -> List[BookingDetail]:
        """Bookings on venues owned by owner_id, newest first"""
        pass

    @abstractmethod
    async def list_for_slots(self, *, slot_ids: Sequence[int]) -> List[Booking]:
        pass
