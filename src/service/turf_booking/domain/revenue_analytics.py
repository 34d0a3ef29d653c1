"""
Owner revenue analytics.

Figures cover confirmed bookings created in the last ``WINDOW_DAYS`` and are
bucketed by the booking's creation date in the venue timezone. A paid booking
counts its full slot price as revenue; an unpaid one counts it as projected
income. Weekly buckets and peak days only look at paid bookings.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable, List, Sequence
from zoneinfo import ZoneInfo

import attrs

from src.service.turf_booking.domain.entity.booking_entity import Booking
from src.service.turf_booking.domain.enum.booking_status import BookingStatus


WINDOW_DAYS = 90
WEEKS_SHOWN = 12
MONTHS_SHOWN = 3
WEEKDAYS = ('Sunday', 'Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday')


@attrs.define(frozen=True)
class WeeklyRevenue:
    week: date  # Monday
    week_label: str  # e.g. 'Nov 2 - Nov 8'
    revenue: int
    bookings: int


@attrs.define(frozen=True)
class MonthlyRevenue:
    month: str  # e.g. 'November 2026'
    revenue: int
    bookings: int
    pending_revenue: int


@attrs.define(frozen=True)
class DayPerformance:
    day: str
    bookings: int
    revenue: int


@attrs.define(frozen=True)
class OwnerAnalytics:
    weekly: List[WeeklyRevenue]
    total_revenue: int
    total_bookings: int
    projected_income: int
    growth_rate: float  # percent, last week against the week before
    monthly: List[MonthlyRevenue]
    peak_days: List[DayPerformance]

    @classmethod
    def empty(cls) -> 'OwnerAnalytics':
        return cls(
            weekly=[],
            total_revenue=0,
            total_bookings=0,
            projected_income=0,
            growth_rate=0.0,
            monthly=[],
            peak_days=[],
        )


def week_label(monday: date) -> str:
    sunday = monday + timedelta(days=6)
    return f'{monday:%b} {monday.day} - {sunday:%b} {sunday.day}'


def weekly_revenue(*, paid: Iterable[Booking], tz: ZoneInfo) -> List[WeeklyRevenue]:
    revenue: dict[date, int] = defaultdict(int)
    count: dict[date, int] = defaultdict(int)
    for booking in paid:
        local_day = _local_date(booking, tz)
        monday = local_day - timedelta(days=local_day.weekday())
        revenue[monday] += booking.total_amount
        count[monday] += 1

    weeks = [
        WeeklyRevenue(
            week=monday, week_label=week_label(monday), revenue=revenue[monday], bookings=count[monday]
        )
        for monday in sorted(revenue)
    ]
    return weeks[-WEEKS_SHOWN:]


def growth_rate(weeks: Sequence[WeeklyRevenue]) -> float:
    """Percent change between the two latest weeks with paid bookings; 0 without a baseline"""
    if len(weeks) < 2 or weeks[-2].revenue == 0:
        return 0.0
    previous, last = weeks[-2].revenue, weeks[-1].revenue
    return round((last - previous) / previous * 100, 1)


def monthly_revenue(
    *, paid: Iterable[Booking], unpaid: Iterable[Booking], tz: ZoneInfo
) -> List[MonthlyRevenue]:
    revenue: dict[tuple[int, int], int] = defaultdict(int)
    count: dict[tuple[int, int], int] = defaultdict(int)
    pending: dict[tuple[int, int], int] = defaultdict(int)
    for booking in paid:
        local_day = _local_date(booking, tz)
        key = (local_day.year, local_day.month)
        revenue[key] += booking.total_amount
        count[key] += 1
    for booking in unpaid:
        local_day = _local_date(booking, tz)
        pending[(local_day.year, local_day.month)] += booking.total_amount

    months = [
        MonthlyRevenue(
            month=f'{date(year, month, 1):%B %Y}',
            revenue=revenue[(year, month)],
            bookings=count[(year, month)],
            pending_revenue=pending[(year, month)],
        )
        for year, month in sorted(set(revenue) | set(pending))
    ]
    return months[-MONTHS_SHOWN:]


def peak_days(*, paid: Iterable[Booking], tz: ZoneInfo) -> List[DayPerformance]:
    """All seven weekdays, highest revenue first; ties keep Sunday-first order"""
    revenue = [0] * 7
    count = [0] * 7
    for booking in paid:
        index = (_local_date(booking, tz).weekday() + 1) % 7
        revenue[index] += booking.total_amount
        count[index] += 1

    days = [
        DayPerformance(day=name, bookings=count[index], revenue=revenue[index])
        for index, name in enumerate(WEEKDAYS)
    ]
    return sorted(days, key=lambda day: day.revenue, reverse=True)


def summarize(*, bookings: Iterable[Booking], now: datetime, tz: ZoneInfo) -> OwnerAnalytics:
    since = now - timedelta(days=WINDOW_DAYS)
    recent = [
        booking
        for booking in bookings
        if booking.status == BookingStatus.CONFIRMED
        and booking.created_at is not None
        and booking.created_at >= since
    ]
    paid = [booking for booking in recent if booking.is_payment_received]
    unpaid = [booking for booking in recent if not booking.is_payment_received]

    weeks = weekly_revenue(paid=paid, tz=tz)
    return OwnerAnalytics(
        weekly=weeks,
        total_revenue=sum(booking.total_amount for booking in paid),
        total_bookings=len(recent),
        projected_income=sum(booking.total_amount for booking in unpaid),
        growth_rate=growth_rate(weeks),
        monthly=monthly_revenue(paid=paid, unpaid=unpaid, tz=tz),
        peak_days=peak_days(paid=paid, tz=tz),
    )


def _local_date(booking: Booking, tz: ZoneInfo) -> date:
    return booking.created_at.astimezone(tz).date()  # type: ignore[union-attr]
