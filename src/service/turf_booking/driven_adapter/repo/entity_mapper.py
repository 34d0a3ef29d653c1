from src.service.turf_booking.domain.entity.booking_entity import Booking
from src.service.turf_booking.domain.entity.review_entity import Review
from src.service.turf_booking.domain.entity.slot_entity import Slot
from src.service.turf_booking.domain.entity.venue_entity import Venue
from src.service.turf_booking.domain.enum.booking_status import BookingStatus
from src.service.turf_booking.domain.value_object.venue_hours import LunchBreak, PinLocation
from src.service.turf_booking.driven_adapter.model.booking_model import BookingModel
from src.service.turf_booking.driven_adapter.model.review_model import ReviewModel
from src.service.turf_booking.driven_adapter.model.slot_model import SlotModel
from src.service.turf_booking.driven_adapter.model.venue_model import VenueModel


def to_venue(db_venue: VenueModel) -> Venue:
    lunch_break = None
    if db_venue.lunch_from_hour is not None and db_venue.lunch_to_hour is not None:
        lunch_break = LunchBreak(from_hour=db_venue.lunch_from_hour, to_hour=db_venue.lunch_to_hour)
    pin_location = None
    if db_venue.pin_lat is not None and db_venue.pin_lng is not None:
        pin_location = PinLocation(lat=db_venue.pin_lat, lng=db_venue.pin_lng)

    return Venue(
        id=db_venue.id,
        owner_id=db_venue.owner_id,
        name=db_venue.name,
        location=db_venue.location,
        sport=db_venue.sport,
        base_price=db_venue.base_price,
        advance_amount=db_venue.advance_amount,
        open_hour=db_venue.open_hour,
        close_hour=db_venue.close_hour,
        slot_duration=db_venue.slot_duration,
        lunch_break=lunch_break,
        pin_location=pin_location,
        image_url=db_venue.image_url,
        created_at=db_venue.created_at,
        updated_at=db_venue.updated_at,
    )


def to_slot(db_slot: SlotModel) -> Slot:
    return Slot(
        id=db_slot.id,
        venue_id=db_slot.venue_id,
        date=db_slot.slot_date,
        start_minute=db_slot.start_minute,
        end_minute=db_slot.end_minute,
        is_booked=db_slot.is_booked,
        booking_id=db_slot.booking_id,
        reserved_at=db_slot.reserved_at,
        created_at=db_slot.created_at,
        updated_at=db_slot.updated_at,
    )


def to_booking(db_booking: BookingModel) -> Booking:
    return Booking(
        id=db_booking.id,
        user_id=db_booking.user_id,
        venue_id=db_booking.venue_id,
        slot_id=db_booking.slot_id,
        amount_received=db_booking.amount_received,
        amount_remaining=db_booking.amount_remaining,
        payer_name=db_booking.payer_name,
        payer_email=db_booking.payer_email,
        status=BookingStatus(db_booking.status),
        is_payment_received=db_booking.is_payment_received,
        created_at=db_booking.created_at,
        updated_at=db_booking.updated_at,
    )


def to_review(db_review: ReviewModel) -> Review:
    return Review(
        id=db_review.id,
        user_id=db_review.user_id,
        venue_id=db_review.venue_id,
        booking_id=db_review.booking_id,
        rating=db_review.rating,
        comment=db_review.comment,
        reviewer_name=db_review.reviewer_name,
        is_anonymous=db_review.is_anonymous,
        is_verified=db_review.is_verified,
        created_at=db_review.created_at,
        updated_at=db_review.updated_at,
    )
