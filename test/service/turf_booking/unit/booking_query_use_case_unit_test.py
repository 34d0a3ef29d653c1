"""
Unit tests for booking listing, receipts and settlement
"""

import pytest

from src.platform.exception.exceptions import DomainError, ForbiddenError
from src.service.turf_booking.app.command.settle_booking_use_case import SettleBookingUseCase
from src.service.turf_booking.app.query.get_receipt_use_case import GetReceiptUseCase
from src.service.turf_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.domain.enum.user_role import UserRole


pytestmark = pytest.mark.unit


@pytest.fixture
def two_venues_with_bookings(turf_state):
    """Owner 10 runs venue 1, owner 11 runs venue 2; player 20 booked one slot at each"""
    turf_state.add_venue(venue_id=1, owner_id=10)
    turf_state.add_venue(venue_id=2, owner_id=11, name='Riverside Courts')
    turf_state.add_slot(slot_id=101, venue_id=1, start_hour=18)
    turf_state.add_slot(slot_id=201, venue_id=2, start_hour=7)
    first = turf_state.add_booking(slot_id=101, user_id=20)
    second = turf_state.add_booking(slot_id=201, user_id=20)
    return first, second


class TestListBookings:
    @pytest.mark.asyncio
    async def test_player_sees_own_bookings(
        self, booking_query_repo, two_venues_with_bookings, player
    ) -> None:
        use_case = ListBookingsUseCase(booking_query_repo=booking_query_repo)

        details = await use_case.execute(requester=player)

        assert {detail.venue_name for detail in details} == {
            'Greenfield Arena',
            'Riverside Courts',
        }

    @pytest.mark.asyncio
    async def test_owner_sees_bookings_on_their_venues_only(
        self, booking_query_repo, two_venues_with_bookings, venue_owner
    ) -> None:
        first, _ = two_venues_with_bookings
        use_case = ListBookingsUseCase(booking_query_repo=booking_query_repo)

        details = await use_case.execute(requester=venue_owner)

        assert [detail.booking.id for detail in details] == [first.id]
        assert details[0].time_range == '18:00 - 19:00'


class TestReceipt:
    @pytest.mark.asyncio
    async def test_booking_user_gets_full_receipt(
        self, booking_query_repo, two_venues_with_bookings, player
    ) -> None:
        # Arrange
        first, _ = two_venues_with_bookings
        use_case = GetReceiptUseCase(booking_query_repo=booking_query_repo)

        # Act
        receipt = await use_case.execute(booking_id=first.id, requester=player)

        # Assert
        assert receipt.booking_id == first.id
        assert receipt.payer_name == 'Asha Rao'
        assert receipt.venue_name == 'Greenfield Arena'
        assert receipt.sport == 'football'
        assert receipt.time_slot == '18:00 - 19:00'
        assert (receipt.advance_paid, receipt.remaining, receipt.total) == (200, 300, 500)

    @pytest.mark.asyncio
    async def test_owner_of_another_venue_cannot_read_receipt(
        self, booking_query_repo, two_venues_with_bookings
    ) -> None:
        first, _ = two_venues_with_bookings
        use_case = GetReceiptUseCase(booking_query_repo=booking_query_repo)
        other_owner = UserEntity(id=11, role=UserRole.OWNER)

        with pytest.raises(ForbiddenError):
            await use_case.execute(booking_id=first.id, requester=other_owner)


class TestSettleBooking:
    @pytest.fixture
    def use_case(
        self, booking_query_repo, booking_command_repo, venue_query_repo
    ) -> SettleBookingUseCase:
        return SettleBookingUseCase(
            booking_query_repo=booking_query_repo,
            booking_command_repo=booking_command_repo,
            venue_query_repo=venue_query_repo,
        )

    @pytest.mark.asyncio
    async def test_owner_settles_remaining_balance(
        self, use_case, turf_state, two_venues_with_bookings, venue_owner
    ) -> None:
        """
        Given: Booking with 200 received and 300 remaining
        When: Venue owner settles it
        Then: 500 received, 0 remaining, payment marked received
        """
        # Arrange
        first, _ = two_venues_with_bookings

        # Act
        settled = await use_case.execute(booking_id=first.id, requester=venue_owner)

        # Assert
        assert settled.amount_received == 500
        assert settled.amount_remaining == 0
        assert settled.is_payment_received is True
        assert turf_state.bookings[first.id].is_payment_received is True

    @pytest.mark.asyncio
    async def test_settling_twice_is_a_domain_error(
        self, use_case, two_venues_with_bookings, venue_owner
    ) -> None:
        first, _ = two_venues_with_bookings
        await use_case.execute(booking_id=first.id, requester=venue_owner)

        with pytest.raises(DomainError, match='already received'):
            await use_case.execute(booking_id=first.id, requester=venue_owner)

    @pytest.mark.asyncio
    async def test_player_cannot_settle(self, use_case, two_venues_with_bookings, player) -> None:
        first, _ = two_venues_with_bookings

        with pytest.raises(ForbiddenError):
            await use_case.execute(booking_id=first.id, requester=player)
