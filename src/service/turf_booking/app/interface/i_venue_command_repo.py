from abc import ABC, abstractmethod

from src.service.turf_booking.domain.entity.venue_entity import Venue


class IVenueCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, venue: Venue) -> Venue:
        pass

    @abstractmethod
    async def delete(self, *, venue_id: int) -> bool:
        """Delete the venue row only; callers remove slots and bookings first"""
        pass
