from datetime import date, datetime, time, timedelta
from typing import Optional
from uuid import UUID
from zoneinfo import ZoneInfo

import attrs


def _format_minute(minute: int) -> str:
    return f'{minute // 60:02d}:{minute % 60:02d}'


@attrs.define(frozen=True)
class Slot:
    """
    A bookable time window of one venue on one calendar date.

    Times are minutes from local midnight in the venue timezone, so a 90 minute
    slot starting at 18:30 is (1110, 1200). ``is_booked`` and ``booking_id``
    are only changed by the reservation repository.
    """

    venue_id: int
    date: date
    start_minute: int
    end_minute: int
    is_booked: bool = False
    booking_id: Optional[UUID] = None
    reserved_at: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def start_hour(self) -> int:
        return self.start_minute // 60

    @property
    def end_hour(self) -> int:
        return self.end_minute // 60

    @property
    def time_range(self) -> str:
        return f'{_format_minute(self.start_minute)} - {_format_minute(self.end_minute)}'

    def describe(self) -> str:
        return f'{self.date.isoformat()} ({self.time_range})'

    def starts_at(self, tz: ZoneInfo) -> datetime:
        midnight = datetime.combine(self.date, time.min, tzinfo=tz)
        return midnight + timedelta(minutes=self.start_minute)

    def ends_at(self, tz: ZoneInfo) -> datetime:
        midnight = datetime.combine(self.date, time.min, tzinfo=tz)
        return midnight + timedelta(minutes=self.end_minute)

    def has_ended(self, *, now: datetime, tz: ZoneInfo) -> bool:
        return self.ends_at(tz) <= now
