"""Application layer DTOs"""

from src.service.turf_booking.app.dto.booking_detail import BookingDetail, Receipt
from src.service.turf_booking.app.dto.cancellation_result import CancellationResult
from src.service.turf_booking.app.dto.notification import BookingConfirmation, CancellationNotice
from src.service.turf_booking.app.dto.reservation_request import (
    RequestState,
    ReservationRequestRecord,
)
from src.service.turf_booking.app.dto.reservation_result import ReservationResult
from src.service.turf_booking.app.dto.review_page import RatingSummary, ReviewEligibility, ReviewPage

__all__ = [
    'BookingConfirmation',
    'BookingDetail',
    'CancellationNotice',
    'CancellationResult',
    'RatingSummary',
    'Receipt',
    'RequestState',
    'ReservationRequestRecord',
    'ReservationResult',
    'ReviewEligibility',
    'ReviewPage',
]
