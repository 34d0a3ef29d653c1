"""
Unit tests for ReconcileOrphanedReservationsUseCase

An orphan is a reserved slot no booking points at. Reservations younger than
the grace period may belong to a request that is still writing bookings and
must be left alone.
"""

from datetime import timedelta

import pytest

from src.platform.exception.exceptions import WriteFailureError
from src.service.turf_booking.app.command.reconcile_orphaned_reservations_use_case import (
    ReconcileOrphanedReservationsUseCase,
)
from src.service.turf_booking.app.command.reserve_slots_use_case import ReserveSlotsUseCase


pytestmark = pytest.mark.unit


@pytest.fixture
def use_case(slot_reservation_repo, fixed_clock) -> ReconcileOrphanedReservationsUseCase:
    return ReconcileOrphanedReservationsUseCase(
        slot_reservation_repo=slot_reservation_repo, clock=fixed_clock, grace_seconds=300
    )


class TestReconcileOrphanedReservations:
    @pytest.mark.asyncio
    async def test_releases_old_orphans_and_keeps_backed_or_recent_slots(
        self, use_case, turf_state, fixed_clock
    ) -> None:
        """
        Given:
          - Slot 101 reserved 10 minutes ago with no booking (orphan)
          - Slot 102 reserved 1 minute ago with no booking (still in flight)
          - Slot 103 reserved and backed by a booking
          - Slot 104 flagged with no reservation time (legacy row)
        When: Reconcile runs with a 5 minute grace period
        Then: 101 and 104 are released, 102 and 103 stay reserved
        """
        # Arrange
        now = fixed_clock()
        turf_state.add_venue()
        turf_state.add_slot(slot_id=101, is_booked=True, reserved_at=now - timedelta(minutes=10))
        turf_state.add_slot(
            slot_id=102, start_hour=19, is_booked=True, reserved_at=now - timedelta(minutes=1)
        )
        turf_state.add_slot(slot_id=103, start_hour=20)
        turf_state.add_booking(slot_id=103)
        turf_state.add_slot(slot_id=104, start_hour=21, is_booked=True)

        # Act
        released = await use_case.execute()

        # Assert
        assert released == 2
        assert turf_state.booked_slot_ids() == {102, 103}

    @pytest.mark.asyncio
    async def test_nothing_to_do_returns_zero(self, use_case, turf_state) -> None:
        turf_state.add_venue()
        turf_state.add_slot(slot_id=101)

        assert await use_case.execute() == 0

    @pytest.mark.asyncio
    async def test_one_failing_release_does_not_stop_the_others(
        self, use_case, turf_state, slot_reservation_repo, fixed_clock
    ) -> None:
        # Arrange
        old = fixed_clock() - timedelta(hours=1)
        turf_state.add_venue()
        turf_state.add_slot(slot_id=101, is_booked=True, reserved_at=old)
        turf_state.add_slot(slot_id=102, start_hour=19, is_booked=True, reserved_at=old)
        slot_reservation_repo.fail_release_for = {101}

        # Act
        released = await use_case.execute()

        # Assert
        assert released == 1
        assert turf_state.booked_slot_ids() == {101}

    @pytest.mark.asyncio
    async def test_cleans_up_after_an_incomplete_reservation_rollback(
        self,
        turf_state,
        venue_query_repo,
        slot_reservation_repo,
        booking_command_repo,
        booking_query_repo,
        idempotency_store,
        notification_sender,
        fixed_clock,
        player,
    ) -> None:
        """
        Given: A reservation whose rollback could not release slot 101
        When: Reconcile runs after the grace period
        Then: Slot 101 is free again
        """
        # Arrange
        turf_state.add_venue()
        turf_state.add_slot(slot_id=101, start_hour=18)
        turf_state.add_slot(slot_id=102, start_hour=19)
        booking_command_repo.fail_on_create_number = 2
        slot_reservation_repo.fail_release_for = {101}
        reserve = ReserveSlotsUseCase(
            venue_query_repo=venue_query_repo,
            slot_reservation_repo=slot_reservation_repo,
            booking_command_repo=booking_command_repo,
            booking_query_repo=booking_query_repo,
            idempotency_store=idempotency_store,
            notification_sender=notification_sender,
            clock=fixed_clock,
        )
        with pytest.raises(WriteFailureError):
            await reserve.execute(venue_id=1, slot_ids=[101, 102], amount=400, payer=player)
        assert turf_state.booked_slot_ids() == {101}

        slot_reservation_repo.fail_release_for = set()
        later = fixed_clock() + timedelta(minutes=6)
        reconcile = ReconcileOrphanedReservationsUseCase(
            slot_reservation_repo=slot_reservation_repo, clock=lambda: later, grace_seconds=300
        )

        # Act
        released = await reconcile.execute()

        # Assert
        assert released == 1
        assert turf_state.booked_slot_ids() == set()
