from datetime import date, datetime
from typing import Optional
from uuid import UUID

import attrs

from src.service.turf_booking.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class BookingDetail:
    """Booking joined with the venue and slot it refers to"""

    booking: Booking
    venue_name: str
    venue_location: str
    venue_owner_id: int
    sport: str
    slot_date: date
    time_range: str
    slot_start_minute: int


@attrs.define(frozen=True)
class Receipt:
    booking_id: UUID
    payer_name: str
    payer_email: str
    venue_name: str
    location: str
    sport: str
    date: date
    time_slot: str
    advance_paid: int
    remaining: int
    total: int
    booking_date: Optional[datetime] = None
