from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from src.service.turf_booking.domain.entity.slot_entity import Slot


class ISlotInventoryRepo(ABC):
    """Slot creation, listing and removal; never touches the reserved flag"""

    @abstractmethod
    async def create_many(self, *, slots: List[Slot]) -> List[Slot]:
        pass

    @abstractmethod
    async def list_by_venue(self, *, venue_id: int, slot_date: Optional[date] = None) -> List[Slot]:
        """Ordered by date, then start minute"""
        pass

    @abstractmethod
    async def get_start_minutes(self, *, venue_id: int, slot_date: date) -> set[int]:
        pass

    @abstractmethod
    async def get_by_id(self, *, slot_id: int) -> Optional[Slot]:
        pass

    @abstractmethod
    async def delete_if_free(self, *, slot_id: int) -> bool:
        """Delete only when not reserved; False when the slot is reserved or gone"""
        pass

    @abstractmethod
    async def delete_by_venue(self, *, venue_id: int) -> int:
        pass
