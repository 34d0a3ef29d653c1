from typing import Optional
from uuid import UUID

import attrs


@attrs.define(frozen=True)
class BookingConfirmation:
    recipient_email: str
    recipient_name: str
    venue_name: str
    venue_location: str
    booking_ids: list[UUID]
    slot_times: list[str]  # e.g. '2025-06-01 (18:00 - 19:00)'
    advance_paid: int
    remaining: int


@attrs.define(frozen=True)
class CancellationNotice:
    recipient_email: str
    recipient_name: str
    venue_name: str
    slot_time: str
    booking_id: UUID
    reason: Optional[str] = None
