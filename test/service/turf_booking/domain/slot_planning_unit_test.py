import pytest

from src.platform.exception.exceptions import InvalidInputError
from src.service.turf_booking.domain.entity.venue_entity import Venue
from src.service.turf_booking.domain.slot_planning import PlannedSlot, plan_slots
from src.service.turf_booking.domain.value_object.venue_hours import LunchBreak


pytestmark = pytest.mark.unit


def _venue(*, slot_duration: int = 60, lunch_break: LunchBreak | None = None) -> Venue:
    return Venue(
        owner_id=10,
        name='Greenfield Arena',
        location='Koramangala',
        sport='football',
        base_price=500,
        advance_amount=200,
        open_hour=6,
        close_hour=22,
        slot_duration=slot_duration,
        lunch_break=lunch_break,
        id=1,
    )


class TestPlanSlots:
    def test_hourly_slots_cover_the_range(self) -> None:
        planned = plan_slots(venue=_venue(), from_hour=6, to_hour=9)

        assert planned == [
            PlannedSlot(360, 420),
            PlannedSlot(420, 480),
            PlannedSlot(480, 540),
        ]

    def test_trailing_partial_slot_is_not_created(self) -> None:
        """90 minute slots in 18-22 fit twice (18:00, 19:30); 21:00 would end at 22:30"""
        planned = plan_slots(venue=_venue(slot_duration=90), from_hour=18, to_hour=22)

        assert [slot.start_minute for slot in planned] == [1080, 1170]

    def test_existing_positions_are_skipped(self) -> None:
        planned = plan_slots(
            venue=_venue(), from_hour=6, to_hour=9, existing_start_minutes={360, 480}
        )

        assert planned == [PlannedSlot(420, 480)]

    def test_range_next_to_lunch_is_allowed(self) -> None:
        venue = _venue(lunch_break=LunchBreak(from_hour=13, to_hour=14))

        planned = plan_slots(venue=venue, from_hour=14, to_hour=16)

        assert [slot.start_minute for slot in planned] == [840, 900]

    @pytest.mark.parametrize(
        'from_hour, to_hour, message',
        [
            (9, 9, 'before to_hour'),
            (10, 8, 'before to_hour'),
            (5, 8, 'within venue open hours'),
            (20, 23, 'within venue open hours'),
            (12, 15, 'lunch break'),
        ],
    )
    def test_invalid_ranges_are_rejected(self, from_hour, to_hour, message) -> None:
        venue = _venue(lunch_break=LunchBreak(from_hour=13, to_hour=14))

        with pytest.raises(InvalidInputError, match=message):
            plan_slots(venue=venue, from_hour=from_hour, to_hour=to_hour)
