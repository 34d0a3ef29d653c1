from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from src.service.turf_booking.domain.entity.slot_entity import Slot


class ISlotReservationRepo(ABC):
    """
    Sole writer of the slot reserved flag.

    Both writes are compare-and-set on a single row so that concurrent
    coordinators never both win a slot and re-running a release is a no-op.
    Implementations raise WriteFailureError when the store rejects a write.
    """

    @abstractmethod
    async def get_by_ids_for_venue(self, *, venue_id: int, slot_ids: Sequence[int]) -> List[Slot]:
        pass

    @abstractmethod
    async def get_by_id(self, *, slot_id: int) -> Optional[Slot]:
        pass

    @abstractmethod
    async def try_reserve(self, *, slot_id: int, reserved_at: datetime) -> bool:
        """
        Set is_booked only if it is currently false

        Returns:
            True if this call reserved the slot, False if someone else holds it
        """
        pass

    @abstractmethod
    async def release(self, *, slot_id: int, reserved_before: Optional[datetime] = None) -> bool:
        """
        Clear is_booked only if it is set and no booking references the slot

        Args:
            reserved_before: Additionally require reserved_at < this instant

        Returns:
            True if this call cleared the flag
        """
        pass

    @abstractmethod
    async def find_orphaned_reservations(self, *, reserved_before: datetime) -> List[Slot]:
        """Reserved slots with no booking whose reservation is older than reserved_before"""
        pass
