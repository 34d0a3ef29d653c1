from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.turf_booking.domain.entity.venue_entity import Venue


class IVenueQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, venue_id: int) -> Optional[Venue]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Venue]:
        pass

    @abstractmethod
    async def list_by_owner(self, *, owner_id: int) -> List[Venue]:
        pass
