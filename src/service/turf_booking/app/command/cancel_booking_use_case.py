from datetime import datetime, timezone
from typing import Callable, Optional, Self
from uuid import UUID
from zoneinfo import ZoneInfo

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    ForbiddenError,
    NotFoundError,
    TooLateError,
    WriteFailureError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.turf_booking.app.dto.cancellation_result import CancellationResult
from src.service.turf_booking.app.dto.notification import CancellationNotice
from src.service.turf_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.turf_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.turf_booking.app.interface.i_notification_sender import INotificationSender
from src.service.turf_booking.app.interface.i_slot_reservation_repo import ISlotReservationRepo
from src.service.turf_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.turf_booking.domain.cancellation_policy import ensure_cancellable
from src.service.turf_booking.domain.entity.booking_entity import Booking
from src.service.turf_booking.domain.entity.slot_entity import Slot
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.domain.entity.venue_entity import Venue


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CancelBookingUseCase:
    """
    Cancel a booking and hand its slot back to the inventory.

    The booking row is deleted first, then the slot flag is cleared with a
    compare-and-set. If clearing the flag fails the cancellation still stands
    and the slot is left for the reconcile job (``slot_released=False``).
    """

    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        booking_command_repo: IBookingCommandRepo,
        slot_reservation_repo: ISlotReservationRepo,
        venue_query_repo: IVenueQueryRepo,
        notification_sender: INotificationSender,
        clock: Callable[[], datetime] = _utc_now,
        venue_timezone: Optional[ZoneInfo] = None,
        cutoff_minutes: Optional[int] = None,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.booking_command_repo = booking_command_repo
        self.slot_reservation_repo = slot_reservation_repo
        self.venue_query_repo = venue_query_repo
        self.notification_sender = notification_sender
        self.clock = clock
        self.venue_timezone = venue_timezone or ZoneInfo(settings.VENUE_TIMEZONE)
        self.cutoff_minutes = (
            settings.CANCELLATION_CUTOFF_MINUTES if cutoff_minutes is None else cutoff_minutes
        )
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        slot_reservation_repo: ISlotReservationRepo = Depends(
            Provide[Container.slot_reservation_repo]
        ),
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
        notification_sender: INotificationSender = Depends(
            Provide[Container.notification_sender]
        ),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            booking_command_repo=booking_command_repo,
            slot_reservation_repo=slot_reservation_repo,
            venue_query_repo=venue_query_repo,
            notification_sender=notification_sender,
        )

    @Logger.io
    async def execute(
        self, *, booking_id: UUID, requester: UserEntity, reason: Optional[str] = None
    ) -> CancellationResult:
        with self.tracer.start_as_current_span(
            'use_case.cancel_booking',
            attributes={'booking.id': str(booking_id), 'user.id': requester.id},
        ):
            booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
            if booking is None:
                raise NotFoundError('Booking not found')
            slot = await self.slot_reservation_repo.get_by_id(slot_id=booking.slot_id)
            if slot is None:
                raise NotFoundError('Slot not found')
            venue = await self.venue_query_repo.get_by_id(venue_id=booking.venue_id)
            if venue is None:
                raise NotFoundError('Venue not found')

            if not self._may_cancel(requester=requester, booking=booking, venue=venue):
                metrics.record_cancellation(result='forbidden')
                raise ForbiddenError('You can only cancel your own bookings')

            try:
                ensure_cancellable(
                    slot_start=slot.starts_at(self.venue_timezone),
                    now=self.clock(),
                    cutoff_minutes=self.cutoff_minutes,
                )
            except TooLateError:
                metrics.record_cancellation(result='too_late')
                raise

            if not await self.booking_command_repo.delete(booking_id=booking_id):
                raise NotFoundError('Booking not found')

            slot_released = await self._release_slot(slot_id=booking.slot_id)
            metrics.record_cancellation(result='cancelled' if slot_released else 'release_failed')
            Logger.base.info(
                f'🗑️ [CANCEL] booking={booking_id} slot={booking.slot_id} '
                f'by user={requester.id} released={slot_released}'
            )

            if requester.id == booking.user_id:
                await self._notify(booking=booking, slot=slot, venue=venue, reason=reason)

            return CancellationResult(
                cancelled_booking_id=booking_id, slot_released=slot_released, reason=reason
            )

    @staticmethod
    def _may_cancel(*, requester: UserEntity, booking: Booking, venue: Venue) -> bool:
        return (
            requester.id == booking.user_id or venue.is_owned_by(requester.id) or requester.is_admin
        )

    async def _release_slot(self, *, slot_id: int) -> bool:
        try:
            if await self.slot_reservation_repo.release(slot_id=slot_id):
                return True
            # Already free counts as released; still flagged means it needs the reconcile job
            slot = await self.slot_reservation_repo.get_by_id(slot_id=slot_id)
            released = slot is None or not slot.is_booked
        except WriteFailureError as e:
            Logger.base.error(f'❌ [CANCEL] Could not release slot {slot_id}: {e}')
            return False

        if not released:
            Logger.base.warning(f'⚠️ [CANCEL] Slot {slot_id} still reserved, left to reconcile')
        return released

    async def _notify(
        self, *, booking: Booking, slot: Slot, venue: Venue, reason: Optional[str]
    ) -> None:
        if not booking.payer_email:
            return
        notice = CancellationNotice(
            recipient_email=booking.payer_email,
            recipient_name=booking.payer_name,
            venue_name=venue.name,
            slot_time=slot.describe(),
            booking_id=booking.id,
            reason=reason,
        )
        try:
            await self.notification_sender.send_booking_cancellation(notice=notice)
        except Exception as e:
            Logger.base.error(f'📧 [CANCEL] Notice for {booking.id} not sent: {e}')
