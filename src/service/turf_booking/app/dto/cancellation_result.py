from typing import Optional
from uuid import UUID

import attrs


@attrs.define(frozen=True)
class CancellationResult:
    cancelled_booking_id: UUID
    slot_released: bool
    reason: Optional[str] = None
