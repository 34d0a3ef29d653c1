from datetime import datetime
from enum import StrEnum
from typing import Iterable, Optional

import attrs

from src.service.turf_booking.app.dto.reservation_result import ReservationResult


class RequestState(StrEnum):
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'


def request_fingerprint(*, venue_id: int, slot_ids: Iterable[int]) -> str:
    """Order-insensitive identity of a reservation request"""
    return f'{venue_id}:' + ','.join(str(slot_id) for slot_id in sorted(slot_ids))


@attrs.define(frozen=True)
class ReservationRequestRecord:
    token: str
    user_id: int
    venue_id: int
    fingerprint: str
    state: RequestState = RequestState.IN_PROGRESS
    result: Optional[ReservationResult] = None
    created_at: Optional[datetime] = None
