"""
In-memory adapters for turf booking unit tests.

The fakes share one ``TurfState`` and follow the same compare-and-set rules as
the SQLAlchemy repositories, so a test can assert on the final inventory
instead of on call sequences. Failure injection knobs:

- ``slot_reservation_repo.fail_reserve_for``: slot ids whose CAS write raises WriteFailureError
- ``slot_reservation_repo.taken_by_racer``: slot ids a concurrent writer grabs just before our CAS
- ``slot_reservation_repo.fail_release_for``: slot ids whose release raises WriteFailureError
- ``booking_command_repo.fail_on_create_number``: 1-based create call that raises WriteFailureError
- ``idempotency_store.fail_complete``: storing a finished result raises WriteFailureError
"""

from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Sequence
from unittest.mock import AsyncMock
from uuid import UUID

import attrs
import pytest

from src.platform.exception.exceptions import ConflictError, WriteFailureError
from src.service.turf_booking.app.dto.booking_detail import BookingDetail
from src.service.turf_booking.app.dto.reservation_request import (
    RequestState,
    ReservationRequestRecord,
)
from src.service.turf_booking.app.dto.reservation_result import ReservationResult
from src.service.turf_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.turf_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.turf_booking.app.interface.i_idempotency_store import IIdempotencyStore
from src.service.turf_booking.app.interface.i_review_repo import IReviewRepo
from src.service.turf_booking.app.interface.i_slot_inventory_repo import ISlotInventoryRepo
from src.service.turf_booking.app.interface.i_slot_reservation_repo import ISlotReservationRepo
from src.service.turf_booking.app.interface.i_venue_command_repo import IVenueCommandRepo
from src.service.turf_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.turf_booking.domain.entity.booking_entity import Booking
from src.service.turf_booking.domain.entity.review_entity import Review
from src.service.turf_booking.domain.entity.slot_entity import Slot
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.domain.entity.venue_entity import Venue
from src.service.turf_booking.domain.enum.user_role import UserRole


SLOT_DATE = date(2026, 11, 2)
RESERVED_AT = datetime(2026, 11, 1, 8, 0, tzinfo=timezone.utc)


class TurfState:
    def __init__(self) -> None:
        self.venues: dict[int, Venue] = {}
        self.slots: dict[int, Slot] = {}
        self.bookings: dict[UUID, Booking] = {}
        self.requests: dict[str, ReservationRequestRecord] = {}
        self.reviews: dict[UUID, Review] = {}

    def add_venue(self, *, venue_id: int = 1, owner_id: int = 10, **overrides) -> Venue:
        fields = {
            'owner_id': owner_id,
            'name': 'Greenfield Arena',
            'location': 'Koramangala, Bengaluru',
            'sport': 'football',
            'base_price': 500,
            'advance_amount': 200,
            'open_hour': 6,
            'close_hour': 23,
            'slot_duration': 60,
            'id': venue_id,
        }
        fields.update(overrides)
        venue = Venue(**fields)
        self.venues[venue_id] = venue
        return venue

    def add_slot(
        self,
        *,
        slot_id: int,
        venue_id: int = 1,
        start_hour: int = 18,
        slot_date: date = SLOT_DATE,
        is_booked: bool = False,
        booking_id: Optional[UUID] = None,
        reserved_at: Optional[datetime] = None,
    ) -> Slot:
        slot = Slot(
            venue_id=venue_id,
            date=slot_date,
            start_minute=start_hour * 60,
            end_minute=start_hour * 60 + 60,
            is_booked=is_booked,
            booking_id=booking_id,
            reserved_at=reserved_at,
            id=slot_id,
        )
        self.slots[slot_id] = slot
        return slot

    def add_booking(self, *, slot_id: int, user_id: int = 20) -> Booking:
        slot = self.slots[slot_id]
        booking = Booking.create(
            user_id=user_id,
            venue_id=slot.venue_id,
            slot_id=slot_id,
            amount_received=200,
            amount_remaining=300,
            payer_name='Asha Rao',
            payer_email='asha@example.com',
        )
        self.bookings[booking.id] = booking
        self.slots[slot_id] = attrs.evolve(
            slot, is_booked=True, booking_id=booking.id, reserved_at=RESERVED_AT
        )
        return booking

    def add_review(
        self,
        *,
        booking: Booking,
        rating: int = 4,
        created_at: datetime = RESERVED_AT,
        is_anonymous: bool = False,
    ) -> Review:
        review = attrs.evolve(
            Review.create(
                user_id=booking.user_id,
                venue_id=booking.venue_id,
                booking_id=booking.id,
                rating=rating,
                comment='Good pitch',
                reviewer_name=booking.payer_name,
                is_anonymous=is_anonymous,
            ),
            created_at=created_at,
        )
        self.reviews[review.id] = review
        return review

    def booked_slot_ids(self) -> set[int]:
        return {slot_id for slot_id, slot in self.slots.items() if slot.is_booked}


class InMemoryVenueQueryRepo(IVenueQueryRepo):
    def __init__(self, state: TurfState) -> None:
        self.state = state

    async def get_by_id(self, *, venue_id: int) -> Optional[Venue]:
        return self.state.venues.get(venue_id)

    async def list_all(self) -> List[Venue]:
        return list(self.state.venues.values())

    async def list_by_owner(self, *, owner_id: int) -> List[Venue]:
        return [venue for venue in self.state.venues.values() if venue.owner_id == owner_id]


class InMemoryVenueCommandRepo(IVenueCommandRepo):
    def __init__(self, state: TurfState) -> None:
        self.state = state

    async def create(self, *, venue: Venue) -> Venue:
        created = attrs.evolve(venue, id=max(self.state.venues, default=0) + 1)
        self.state.venues[created.id or 0] = created
        return created

    async def delete(self, *, venue_id: int) -> bool:
        return self.state.venues.pop(venue_id, None) is not None


class InMemorySlotInventoryRepo(ISlotInventoryRepo):
    def __init__(self, state: TurfState) -> None:
        self.state = state

    async def create_many(self, *, slots: List[Slot]) -> List[Slot]:
        created = []
        for slot in slots:
            slot_id = max(self.state.slots, default=0) + 1
            self.state.slots[slot_id] = attrs.evolve(slot, id=slot_id)
            created.append(self.state.slots[slot_id])
        return created

    async def list_by_venue(self, *, venue_id: int, slot_date: Optional[date] = None) -> List[Slot]:
        slots = [
            slot
            for slot in self.state.slots.values()
            if slot.venue_id == venue_id and (slot_date is None or slot.date == slot_date)
        ]
        return sorted(slots, key=lambda slot: (slot.date, slot.start_minute))

    async def get_start_minutes(self, *, venue_id: int, slot_date: date) -> set[int]:
        return {
            slot.start_minute
            for slot in self.state.slots.values()
            if slot.venue_id == venue_id and slot.date == slot_date
        }

    async def get_by_id(self, *, slot_id: int) -> Optional[Slot]:
        return self.state.slots.get(slot_id)

    async def delete_if_free(self, *, slot_id: int) -> bool:
        slot = self.state.slots.get(slot_id)
        if slot is None or slot.is_booked:
            return False
        del self.state.slots[slot_id]
        return True

    async def delete_by_venue(self, *, venue_id: int) -> int:
        doomed = [s for s, slot in self.state.slots.items() if slot.venue_id == venue_id]
        for slot_id in doomed:
            del self.state.slots[slot_id]
        return len(doomed)


class InMemorySlotReservationRepo(ISlotReservationRepo):
    def __init__(self, state: TurfState) -> None:
        self.state = state
        self.fail_reserve_for: set[int] = set()
        self.taken_by_racer: set[int] = set()
        self.fail_release_for: set[int] = set()
        self.reserve_calls = 0

    async def get_by_ids_for_venue(self, *, venue_id: int, slot_ids: Sequence[int]) -> List[Slot]:
        return [
            slot
            for slot_id, slot in self.state.slots.items()
            if slot_id in slot_ids and slot.venue_id == venue_id
        ]

    async def get_by_id(self, *, slot_id: int) -> Optional[Slot]:
        return self.state.slots.get(slot_id)

    async def try_reserve(self, *, slot_id: int, reserved_at: datetime) -> bool:
        self.reserve_calls += 1
        if slot_id in self.fail_reserve_for:
            raise WriteFailureError('Could not update slot')
        if slot_id in self.taken_by_racer:
            self.state.slots[slot_id] = attrs.evolve(
                self.state.slots[slot_id], is_booked=True, reserved_at=reserved_at
            )
        slot = self.state.slots.get(slot_id)
        if slot is None or slot.is_booked:
            return False
        self.state.slots[slot_id] = attrs.evolve(slot, is_booked=True, reserved_at=reserved_at)
        return True

    async def release(self, *, slot_id: int, reserved_before: Optional[datetime] = None) -> bool:
        if slot_id in self.fail_release_for:
            raise WriteFailureError('Could not update slot')
        slot = self.state.slots.get(slot_id)
        if slot is None or not slot.is_booked or slot.booking_id is not None:
            return False
        if (
            reserved_before is not None
            and slot.reserved_at is not None
            and slot.reserved_at >= reserved_before
        ):
            return False
        self.state.slots[slot_id] = attrs.evolve(slot, is_booked=False, reserved_at=None)
        return True

    async def find_orphaned_reservations(self, *, reserved_before: datetime) -> List[Slot]:
        return [
            slot
            for slot in self.state.slots.values()
            if slot.is_booked
            and slot.booking_id is None
            and (slot.reserved_at is None or slot.reserved_at < reserved_before)
        ]


class InMemoryBookingCommandRepo(IBookingCommandRepo):
    def __init__(self, state: TurfState) -> None:
        self.state = state
        self.fail_on_create_number: Optional[int] = None
        self.fail_delete = False
        self.create_calls = 0

    async def create(self, *, booking: Booking) -> Booking:
        self.create_calls += 1
        if self.create_calls == self.fail_on_create_number:
            raise WriteFailureError('Could not create booking')
        slot = self.state.slots[booking.slot_id]
        if slot.booking_id is not None:
            raise ConflictError('Slot already has a booking', conflicting_slot_ids=[slot.id or 0])
        self.state.bookings[booking.id] = booking
        self.state.slots[booking.slot_id] = attrs.evolve(slot, booking_id=booking.id)
        return booking

    async def delete(self, *, booking_id: UUID) -> bool:
        if self.fail_delete:
            raise WriteFailureError('Could not delete booking')
        booking = self.state.bookings.pop(booking_id, None)
        if booking is None:
            return False
        slot = self.state.slots.get(booking.slot_id)
        if slot is not None:
            self.state.slots[booking.slot_id] = attrs.evolve(slot, booking_id=None)
        return True

    async def update_payment(self, *, booking: Booking) -> Booking:
        self.state.bookings[booking.id] = booking
        return booking

    async def delete_by_venue(self, *, venue_id: int) -> int:
        doomed = [b.id for b in self.state.bookings.values() if b.venue_id == venue_id]
        for booking_id in doomed:
            del self.state.bookings[booking_id]
        return len(doomed)


class InMemoryBookingQueryRepo(IBookingQueryRepo):
    def __init__(self, state: TurfState) -> None:
        self.state = state

    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        return self.state.bookings.get(booking_id)

    async def get_detail(self, *, booking_id: UUID) -> Optional[BookingDetail]:
        booking = self.state.bookings.get(booking_id)
        return None if booking is None else self._detail(booking)

    async def list_for_user(self, *, user_id: int) -> List[BookingDetail]:
        return [self._detail(b) for b in self.state.bookings.values() if b.user_id == user_id]

    async def list_for_owner(self, *, owner_id: int) -> List[BookingDetail]:
        return [
            self._detail(b)
            for b in self.state.bookings.values()
            if self.state.venues[b.venue_id].owner_id == owner_id
        ]

    async def list_for_slots(self, *, slot_ids: Sequence[int]) -> List[Booking]:
        return [b for b in self.state.bookings.values() if b.slot_id in slot_ids]

    def _detail(self, booking: Booking) -> BookingDetail:
        venue = self.state.venues[booking.venue_id]
        slot = self.state.slots[booking.slot_id]
        return BookingDetail(
            booking=booking,
            venue_name=venue.name,
            venue_location=venue.location,
            venue_owner_id=venue.owner_id,
            sport=venue.sport,
            slot_date=slot.date,
            time_range=slot.time_range,
            slot_start_minute=slot.start_minute,
        )


class InMemoryIdempotencyStore(IIdempotencyStore):
    def __init__(self, state: TurfState) -> None:
        self.state = state
        self.fail_complete = False

    async def claim(
        self, *, record: ReservationRequestRecord
    ) -> tuple[bool, ReservationRequestRecord]:
        existing = self.state.requests.get(record.token)
        if existing is not None:
            return False, existing
        self.state.requests[record.token] = record
        return True, record

    async def complete(self, *, token: str, result: ReservationResult) -> None:
        if self.fail_complete:
            raise WriteFailureError('Could not store idempotency result')
        self.state.requests[token] = attrs.evolve(
            self.state.requests[token], state=RequestState.COMPLETED, result=result
        )

    async def release(self, *, token: str) -> None:
        record = self.state.requests.get(token)
        if record is not None and record.state == RequestState.IN_PROGRESS:
            del self.state.requests[token]

    async def take_over(self, *, token: str, stale_before: datetime, claimed_at: datetime) -> bool:
        record = self.state.requests.get(token)
        if (
            record is None
            or record.state != RequestState.IN_PROGRESS
            or record.created_at is None
            or record.created_at > stale_before
        ):
            return False
        self.state.requests[token] = attrs.evolve(record, created_at=claimed_at)
        return True


class InMemoryReviewRepo(IReviewRepo):
    def __init__(self, state: TurfState) -> None:
        self.state = state

    async def create(self, *, review: Review) -> Review:
        if any(r.booking_id == review.booking_id for r in self.state.reviews.values()):
            raise ConflictError('Review already exists for this booking')
        self.state.reviews[review.id] = review
        return review

    async def get_by_id(self, *, review_id: UUID) -> Optional[Review]:
        return self.state.reviews.get(review_id)

    async def get_by_booking(self, *, booking_id: UUID) -> Optional[Review]:
        return next((r for r in self.state.reviews.values() if r.booking_id == booking_id), None)

    async def list_reviews(
        self,
        *,
        venue_id: Optional[int] = None,
        user_id: Optional[int] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[List[Review], int]:
        matching = [
            r
            for r in self.state.reviews.values()
            if (venue_id is None or r.venue_id == venue_id)
            and (user_id is None or r.user_id == user_id)
        ]
        matching.sort(key=lambda r: r.created_at or RESERVED_AT, reverse=True)
        return matching[offset : offset + limit], len(matching)

    async def rating_stats(self, *, venue_id: int) -> tuple[Optional[float], int]:
        ratings = [r.rating for r in self.state.reviews.values() if r.venue_id == venue_id]
        if not ratings:
            return None, 0
        return sum(ratings) / len(ratings), len(ratings)

    async def update(self, *, review: Review) -> Review:
        self.state.reviews[review.id] = review
        return review

    async def delete(self, *, review_id: UUID) -> bool:
        return self.state.reviews.pop(review_id, None) is not None


@pytest.fixture
def turf_state() -> TurfState:
    return TurfState()


@pytest.fixture
def venue_query_repo(turf_state: TurfState) -> InMemoryVenueQueryRepo:
    return InMemoryVenueQueryRepo(turf_state)


@pytest.fixture
def venue_command_repo(turf_state: TurfState) -> InMemoryVenueCommandRepo:
    return InMemoryVenueCommandRepo(turf_state)


@pytest.fixture
def slot_inventory_repo(turf_state: TurfState) -> InMemorySlotInventoryRepo:
    return InMemorySlotInventoryRepo(turf_state)


@pytest.fixture
def slot_reservation_repo(turf_state: TurfState) -> InMemorySlotReservationRepo:
    return InMemorySlotReservationRepo(turf_state)


@pytest.fixture
def booking_command_repo(turf_state: TurfState) -> InMemoryBookingCommandRepo:
    return InMemoryBookingCommandRepo(turf_state)


@pytest.fixture
def booking_query_repo(turf_state: TurfState) -> InMemoryBookingQueryRepo:
    return InMemoryBookingQueryRepo(turf_state)


@pytest.fixture
def idempotency_store(turf_state: TurfState) -> InMemoryIdempotencyStore:
    return InMemoryIdempotencyStore(turf_state)


@pytest.fixture
def review_repo(turf_state: TurfState) -> InMemoryReviewRepo:
    return InMemoryReviewRepo(turf_state)


@pytest.fixture
def notification_sender() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: RESERVED_AT


@pytest.fixture
def player() -> UserEntity:
    return UserEntity(id=20, email='asha@example.com', name='Asha Rao', role=UserRole.USER)


@pytest.fixture
def venue_owner() -> UserEntity:
    return UserEntity(id=10, email='owner@example.com', name='Ravi Kumar', role=UserRole.OWNER)


@pytest.fixture
def admin() -> UserEntity:
    return UserEntity(id=1, email='admin@example.com', name='Ops', role=UserRole.ADMIN)
