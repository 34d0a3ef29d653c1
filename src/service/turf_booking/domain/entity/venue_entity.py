from datetime import datetime, timezone
from typing import Optional

import attrs

from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.domain.value_object.venue_hours import LunchBreak, PinLocation


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise InvalidInputError(f'Venue {attribute.name} cannot be empty')


@attrs.define(frozen=True)
class Venue:
    owner_id: int
    name: str = attrs.field(validator=_validate_non_empty_string)
    location: str = attrs.field(validator=_validate_non_empty_string)
    sport: str = attrs.field(validator=_validate_non_empty_string)
    base_price: int  # price of one slot
    advance_amount: int  # minimum paid up front per slot
    open_hour: int
    close_hour: int
    slot_duration: int  # minutes
    lunch_break: Optional[LunchBreak] = None
    pin_location: Optional[PinLocation] = None
    image_url: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        owner_id: int,
        name: str,
        location: str,
        sport: str,
        base_price: int,
        advance_amount: int,
        open_hour: int,
        close_hour: int,
        slot_duration: int,
        lunch_break: Optional[LunchBreak] = None,
        pin_location: Optional[PinLocation] = None,
        image_url: Optional[str] = None,
    ) -> 'Venue':
        if not 0 <= open_hour < close_hour <= 24:
            raise InvalidInputError('Opening hours must satisfy 0 <= open_hour < close_hour <= 24')
        if lunch_break is not None:
            if lunch_break.from_hour >= lunch_break.to_hour:
                raise InvalidInputError('Lunch break must start before it ends')
            if lunch_break.from_hour < open_hour or lunch_break.to_hour > close_hour:
                raise InvalidInputError('Lunch break must fall inside opening hours')
        if slot_duration <= 0 or slot_duration > (close_hour - open_hour) * 60:
            raise InvalidInputError('Slot duration must be positive and fit inside opening hours')
        if base_price <= 0:
            raise InvalidInputError('Base price must be positive')
        if not 0 <= advance_amount <= base_price:
            raise InvalidInputError('Advance amount must be between 0 and the base price')

        now = datetime.now(timezone.utc)
        return cls(
            owner_id=owner_id,
            name=name,
            location=location,
            sport=sport,
            base_price=base_price,
            advance_amount=advance_amount,
            open_hour=open_hour,
            close_hour=close_hour,
            slot_duration=slot_duration,
            lunch_break=lunch_break,
            pin_location=pin_location,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )

    def is_owned_by(self, user_id: int) -> bool:
        return self.owner_id == user_id
