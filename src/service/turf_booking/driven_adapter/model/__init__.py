"""
Database Models

Import all models here so they are registered on Base.metadata
"""

from functools import lru_cache

from src.service.turf_booking.driven_adapter.model.booking_model import BookingModel
from src.service.turf_booking.driven_adapter.model.reservation_request_model import (
    ReservationRequestModel,
)
from src.service.turf_booking.driven_adapter.model.review_model import ReviewModel
from src.service.turf_booking.driven_adapter.model.slot_model import SlotModel
from src.service.turf_booking.driven_adapter.model.venue_model import VenueModel


@lru_cache(maxsize=1)
def register_models() -> tuple[type, ...]:
    """Called at startup and by alembic; safe to call repeatedly"""
    return (VenueModel, SlotModel, BookingModel, ReservationRequestModel, ReviewModel)


__all__ = [
    'BookingModel',
    'ReservationRequestModel',
    'ReviewModel',
    'SlotModel',
    'VenueModel',
    'register_models',
]
