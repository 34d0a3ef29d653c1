from typing import Iterable

import attrs

from src.platform.exception.exceptions import InvalidInputError
from src.service.turf_booking.domain.entity.venue_entity import Venue


@attrs.define(frozen=True)
class PlannedSlot:
    start_minute: int
    end_minute: int


def plan_slots(
    *,
    venue: Venue,
    from_hour: int,
    to_hour: int,
    existing_start_minutes: Iterable[int] = (),
) -> list[PlannedSlot]:
    """
    Lay out consecutive slots of ``venue.slot_duration`` minutes inside [from_hour, to_hour).

    Positions that fall in the lunch break or already exist are skipped. A
    trailing position that would run past ``to_hour`` is not created.
    """
    if from_hour >= to_hour:
        raise InvalidInputError('from_hour must be before to_hour')
    if from_hour < venue.open_hour or to_hour > venue.close_hour:
        raise InvalidInputError(
            f'Slots must be within venue open hours ({venue.open_hour} - {venue.close_hour})'
        )
    lunch = venue.lunch_break
    if lunch is not None and lunch.overlaps_hours(from_hour, to_hour):
        raise InvalidInputError(
            f'Slots cannot overlap lunch break ({lunch.from_hour} - {lunch.to_hour})'
        )

    taken = set(existing_start_minutes)
    planned = []
    start, stop = from_hour * 60, to_hour * 60
    while start + venue.slot_duration <= stop:
        in_lunch = lunch is not None and lunch.covers_minute(start)
        if not in_lunch and start not in taken:
            planned.append(PlannedSlot(start_minute=start, end_minute=start + venue.slot_duration))
        start += venue.slot_duration
    return planned
