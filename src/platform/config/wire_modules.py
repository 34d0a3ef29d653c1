"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.turf_booking.app.command import (
    cancel_booking_use_case,
    create_venue_use_case,
    delete_review_use_case,
    delete_slot_use_case,
    delete_venue_use_case,
    generate_slots_use_case,
    reconcile_orphaned_reservations_use_case,
    reserve_slots_use_case,
    settle_booking_use_case,
    submit_review_use_case,
    update_review_use_case,
)
from src.service.turf_booking.app.query import (
    check_review_eligibility_use_case,
    get_owner_analytics_use_case,
    get_receipt_use_case,
    get_venue_use_case,
    list_bookings_use_case,
    list_reviews_use_case,
    list_slots_use_case,
    list_venues_use_case,
)
from src.service.turf_booking.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    create_venue_use_case,
    delete_venue_use_case,
    generate_slots_use_case,
    delete_slot_use_case,
    reserve_slots_use_case,
    cancel_booking_use_case,
    settle_booking_use_case,
    reconcile_orphaned_reservations_use_case,
    list_venues_use_case,
    get_venue_use_case,
    list_slots_use_case,
    list_bookings_use_case,
    get_receipt_use_case,
    submit_review_use_case,
    update_review_use_case,
    delete_review_use_case,
    list_reviews_use_case,
    check_review_eligibility_use_case,
    get_owner_analytics_use_case,
    role_auth,
]
