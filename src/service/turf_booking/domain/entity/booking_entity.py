from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.domain.enum.booking_status import BookingStatus


@attrs.define(frozen=True)
class Booking:
    id: UUID
    user_id: int
    venue_id: int
    slot_id: int
    amount_received: int
    amount_remaining: int
    payer_name: str = ''
    payer_email: str = ''
    status: BookingStatus = BookingStatus.PENDING
    is_payment_received: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        venue_id: int,
        slot_id: int,
        amount_received: int,
        amount_remaining: int,
        payer_name: str = '',
        payer_email: str = '',
    ) -> 'Booking':
        if amount_received < 0 or amount_remaining < 0:
            raise DomainError('Booking amounts cannot be negative')

        now = datetime.now(timezone.utc)
        return cls(
            id=uuid7(),
            user_id=user_id,
            venue_id=venue_id,
            slot_id=slot_id,
            amount_received=amount_received,
            amount_remaining=amount_remaining,
            payer_name=payer_name,
            payer_email=payer_email,
            status=BookingStatus.CONFIRMED,
            is_payment_received=amount_remaining == 0,
            created_at=now,
            updated_at=now,
        )

    @property
    def total_amount(self) -> int:
        return self.amount_received + self.amount_remaining

    @Logger.io
    def settle(self) -> 'Booking':
        """Record the balance as collected at the venue"""
        if self.is_payment_received:
            raise DomainError('Booking payment already received')
        if self.status != BookingStatus.CONFIRMED:
            raise DomainError('Only confirmed bookings can be settled')

        return attrs.evolve(
            self,
            amount_received=self.total_amount,
            amount_remaining=0,
            is_payment_received=True,
            updated_at=datetime.now(timezone.utc),
        )
