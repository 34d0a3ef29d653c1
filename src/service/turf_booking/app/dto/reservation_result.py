from typing import Any
from uuid import UUID

import attrs


@attrs.define(frozen=True)
class ReservationResult:
    booking_ids: list[UUID]
    slot_ids: list[int]
    total_charged: int
    total_remaining: int
    replayed: bool = False

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe form kept by the idempotency store"""
        return {
            'booking_ids': [str(booking_id) for booking_id in self.booking_ids],
            'slot_ids': list(self.slot_ids),
            'total_charged': self.total_charged,
            'total_remaining': self.total_remaining,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any], *, replayed: bool = False) -> 'ReservationResult':
        return cls(
            booking_ids=[UUID(booking_id) for booking_id in payload['booking_ids']],
            slot_ids=[int(slot_id) for slot_id in payload['slot_ids']],
            total_charged=int(payload['total_charged']),
            total_remaining=int(payload['total_remaining']),
            replayed=replayed,
        )
