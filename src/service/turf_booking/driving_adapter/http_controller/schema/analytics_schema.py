import datetime as dt
from typing import List

from pydantic import BaseModel

from src.service.turf_booking.domain.revenue_analytics import OwnerAnalytics


class WeeklyRevenueResponse(BaseModel):
    week: dt.date
    week_label: str
    revenue: int
    bookings: int


class MonthlyRevenueResponse(BaseModel):
    month: str
    revenue: int
    bookings: int
    pending_revenue: int


class DayPerformanceResponse(BaseModel):
    day: str
    bookings: int
    revenue: int


class OwnerAnalyticsResponse(BaseModel):
    weekly_data: List[WeeklyRevenueResponse]
    total_revenue: int
    total_bookings: int
    projected_income: int
    growth_rate: float
    monthly_comparison: List[MonthlyRevenueResponse]
    peak_days: List[DayPerformanceResponse]

    @classmethod
    def from_analytics(cls, analytics: OwnerAnalytics) -> 'OwnerAnalyticsResponse':
        return cls(
            weekly_data=[
                WeeklyRevenueResponse(
                    week=week.week,
                    week_label=week.week_label,
                    revenue=week.revenue,
                    bookings=week.bookings,
                )
                for week in analytics.weekly
            ],
            total_revenue=analytics.total_revenue,
            total_bookings=analytics.total_bookings,
            projected_income=analytics.projected_income,
            growth_rate=analytics.growth_rate,
            monthly_comparison=[
                MonthlyRevenueResponse(
                    month=month.month,
                    revenue=month.revenue,
                    bookings=month.bookings,
                    pending_revenue=month.pending_revenue,
                )
                for month in analytics.monthly
            ],
            peak_days=[
                DayPerformanceResponse(day=day.day, bookings=day.bookings, revenue=day.revenue)
                for day in analytics.peak_days
            ],
        )
