from abc import ABC, abstractmethod
from datetime import datetime

from src.service.turf_booking.app.dto.reservation_request import ReservationRequestRecord
from src.service.turf_booking.app.dto.reservation_result import ReservationResult


class IIdempotencyStore(ABC):
    @abstractmethod
    async def claim(self, *, record: ReservationRequestRecord) -> tuple[bool, ReservationRequestRecord]:
        """
        Insert the record unless its token already exists

        Returns:
            (True, record) when this call claimed the token,
            (False, existing) when another request already holds it
        """
        pass

    @abstractmethod
    async def complete(self, *, token: str, result: ReservationResult) -> None:
        pass

    @abstractmethod
    async def release(self, *, token: str) -> None:
        """Forget an in-progress claim so the token can be retried"""
        pass

    @abstractmethod
    async def take_over(self, *, token: str, stale_before: datetime, claimed_at: datetime) -> bool:
        """
        Re-claim an in-progress token created at or before ``stale_before``

        Restamps the claim with ``claimed_at`` so concurrent retries see it as
        fresh. Returns False when the token is gone, completed, or younger.
        """
        pass
