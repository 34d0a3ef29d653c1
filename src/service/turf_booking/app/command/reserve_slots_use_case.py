import time
from datetime import datetime, timedelta, timezone
from functools import partial
from typing import Callable, List, Optional, Self, Sequence

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    ConflictError,
    CustomBaseError,
    InvalidInputError,
    NotFoundError,
    PartialInventoryError,
    WriteFailureError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.turf_booking.app.compensation_stack import CompensationStack
from src.service.turf_booking.app.dto.notification import BookingConfirmation
from src.service.turf_booking.app.dto.reservation_request import (
    RequestState,
    ReservationRequestRecord,
    request_fingerprint,
)
from src.service.turf_booking.app.dto.reservation_result import ReservationResult
from src.service.turf_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.turf_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.turf_booking.app.interface.i_idempotency_store import IIdempotencyStore
from src.service.turf_booking.app.interface.i_notification_sender import INotificationSender
from src.service.turf_booking.app.interface.i_slot_reservation_repo import ISlotReservationRepo
from src.service.turf_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.turf_booking.domain.entity.booking_entity import Booking
from src.service.turf_booking.domain.entity.slot_entity import Slot
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.domain.entity.venue_entity import Venue
from src.service.turf_booking.domain.pricing_policy import SlotCharge, apportion_payment


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


_OUTCOMES: dict[type[CustomBaseError], str] = {
    ConflictError: 'conflict',
    PartialInventoryError: 'partial_inventory',
    NotFoundError: 'not_found',
    WriteFailureError: 'write_failure',
    InvalidInputError: 'invalid',
}


class ReserveSlotsUseCase:
    """
    Book one or more slots of a venue as a single all-or-nothing operation.

    Flow:
    1. Validate the request and, with an idempotency token, claim it
    2. Load venue and slots (NotFound / PartialInventory / Conflict fail fast, no writes)
    3. Compare-and-set every slot's reserved flag, pushing a release per success
    4. Create one confirmed booking per slot, pushing a delete per success
    5. On any failure unwind the compensation stack newest first
    6. Send the confirmation (failures are logged, never unwound)

    A token whose claim is still in progress after ``claim_timeout_seconds`` is
    taken over: the result is rebuilt from the user's bookings on the requested
    slots, or the request runs again under the same claim.

    There is no transaction across steps 3-4; the compensation stack plus the
    reconcile job are what restore the inventory when a step fails.
    """

    def __init__(
        self,
        *,
        venue_query_repo: IVenueQueryRepo,
        slot_reservation_repo: ISlotReservationRepo,
        booking_command_repo: IBookingCommandRepo,
        booking_query_repo: IBookingQueryRepo,
        idempotency_store: IIdempotencyStore,
        notification_sender: INotificationSender,
        clock: Callable[[], datetime] = _utc_now,
        claim_timeout_seconds: Optional[int] = None,
    ) -> None:
        self.venue_query_repo = venue_query_repo
        self.slot_reservation_repo = slot_reservation_repo
        self.booking_command_repo = booking_command_repo
        self.booking_query_repo = booking_query_repo
        self.idempotency_store = idempotency_store
        self.notification_sender = notification_sender
        self.clock = clock
        self.claim_timeout_seconds = (
            settings.RECONCILE_GRACE_SECONDS
            if claim_timeout_seconds is None
            else claim_timeout_seconds
        )
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
        slot_reservation_repo: ISlotReservationRepo = Depends(
            Provide[Container.slot_reservation_repo]
        ),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        idempotency_store: IIdempotencyStore = Depends(Provide[Container.idempotency_store]),
        notification_sender: INotificationSender = Depends(
            Provide[Container.notification_sender]
        ),
    ) -> Self:
        return cls(
            venue_query_repo=venue_query_repo,
            slot_reservation_repo=slot_reservation_repo,
            booking_command_repo=booking_command_repo,
            booking_query_repo=booking_query_repo,
            idempotency_store=idempotency_store,
            notification_sender=notification_sender,
        )

    @Logger.io
    async def execute(
        self,
        *,
        venue_id: int,
        slot_ids: Sequence[int],
        amount: int,
        payer: UserEntity,
        idempotency_token: Optional[str] = None,
        amounts_per_slot: Optional[Sequence[int]] = None,
    ) -> ReservationResult:
        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.reserve_slots',
            attributes={
                'venue.id': venue_id,
                'slot.count': len(slot_ids),
                'user.id': payer.id,
                'request.idempotent': idempotency_token is not None,
            },
        ) as span:
            try:
                self._validate_request(slot_ids=slot_ids, amount=amount)
                if idempotency_token is None:
                    result = await self._reserve(
                        venue_id=venue_id,
                        slot_ids=list(slot_ids),
                        amount=amount,
                        payer=payer,
                        amounts_per_slot=amounts_per_slot,
                    )
                else:
                    result = await self._reserve_once(
                        token=idempotency_token,
                        venue_id=venue_id,
                        slot_ids=list(slot_ids),
                        amount=amount,
                        payer=payer,
                        amounts_per_slot=amounts_per_slot,
                    )
            except CustomBaseError as e:
                outcome = _OUTCOMES.get(type(e), 'rejected')
                span.set_attribute('reservation.outcome', outcome)
                metrics.record_reservation(
                    result=outcome,
                    duration=time.perf_counter() - started,
                    slot_count=len(slot_ids),
                )
                raise

            outcome = 'replayed' if result.replayed else 'success'
            span.set_attribute('reservation.outcome', outcome)
            metrics.record_reservation(
                result=outcome, duration=time.perf_counter() - started, slot_count=len(slot_ids)
            )
            return result

    @staticmethod
    def _validate_request(*, slot_ids: Sequence[int], amount: int) -> None:
        if not slot_ids:
            raise InvalidInputError('At least one slot must be selected')
        if len(set(slot_ids)) != len(slot_ids):
            raise InvalidInputError('Slot ids must not repeat')
        if amount < 0:
            raise InvalidInputError('Amount cannot be negative')

    async def _reserve_once(
        self,
        *,
        token: str,
        venue_id: int,
        slot_ids: List[int],
        amount: int,
        payer: UserEntity,
        amounts_per_slot: Optional[Sequence[int]],
    ) -> ReservationResult:
        fingerprint = request_fingerprint(venue_id=venue_id, slot_ids=slot_ids)
        now = self.clock()
        claimed, record = await self.idempotency_store.claim(
            record=ReservationRequestRecord(
                token=token,
                user_id=payer.id,
                venue_id=venue_id,
                fingerprint=fingerprint,
                created_at=now,
            )
        )
        if not claimed:
            if record.user_id != payer.id or record.fingerprint != fingerprint:
                raise InvalidInputError('Idempotency key was already used for a different request')
            if record.state == RequestState.COMPLETED and record.result is not None:
                Logger.base.info(f'🔁 [RESERVE] Replaying stored result for {record.fingerprint}')
                return attrs.evolve(record.result, replayed=True)
            if not await self.idempotency_store.take_over(
                token=token,
                stale_before=now - timedelta(seconds=self.claim_timeout_seconds),
                claimed_at=now,
            ):
                raise ConflictError('A request with this idempotency key is still in progress')

            recovered = await self._recover_from_bookings(
                token=token, slot_ids=slot_ids, user_id=payer.id
            )
            if recovered is not None:
                return recovered
            Logger.base.warning(f'♻️ [RESERVE] Rerunning stale idempotency claim for {fingerprint}')

        try:
            result = await self._reserve(
                venue_id=venue_id,
                slot_ids=slot_ids,
                amount=amount,
                payer=payer,
                amounts_per_slot=amounts_per_slot,
            )
        except Exception:
            await self._release_claim(token=token)
            raise

        await self._store_result(token=token, result=result)
        return result

    async def _recover_from_bookings(
        self, *, token: str, slot_ids: List[int], user_id: int
    ) -> Optional[ReservationResult]:
        """
        Rebuild the result of a stale claim whose request never stored it.

        Only when the user holds a booking on every requested slot did the earlier
        attempt go through. Anything less returns None and the request runs
        again, where slots held by anyone surface as Conflict.
        """
        held = {
            booking.slot_id: booking
            for booking in await self.booking_query_repo.list_for_slots(slot_ids=slot_ids)
            if booking.user_id == user_id
        }
        if len(held) != len(slot_ids):
            return None

        bookings = [held[slot_id] for slot_id in slot_ids]
        result = ReservationResult(
            booking_ids=[booking.id for booking in bookings],
            slot_ids=list(slot_ids),
            total_charged=sum(booking.amount_received for booking in bookings),
            total_remaining=sum(booking.amount_remaining for booking in bookings),
        )
        Logger.base.warning(f'♻️ [RESERVE] Rebuilt stale idempotency result: {result.booking_ids}')
        await self._store_result(token=token, result=result)
        return attrs.evolve(result, replayed=True)

    async def _store_result(self, *, token: str, result: ReservationResult) -> None:
        try:
            await self.idempotency_store.complete(token=token, result=result)
        except WriteFailureError as e:
            # The claim stays in progress until it goes stale and is recovered from the bookings
            Logger.base.error(f'❌ [RESERVE] Could not store result for idempotency token: {e}')

    async def _release_claim(self, *, token: str) -> None:
        try:
            await self.idempotency_store.release(token=token)
        except WriteFailureError as e:
            Logger.base.error(f'❌ [RESERVE] Could not release idempotency claim: {e}')

    async def _reserve(
        self,
        *,
        venue_id: int,
        slot_ids: List[int],
        amount: int,
        payer: UserEntity,
        amounts_per_slot: Optional[Sequence[int]],
    ) -> ReservationResult:
        venue = await self.venue_query_repo.get_by_id(venue_id=venue_id)
        if venue is None:
            raise NotFoundError('Venue not found')

        slots = await self._load_free_slots(venue_id=venue_id, slot_ids=slot_ids)
        charges = apportion_payment(
            amount=amount,
            slot_count=len(slots),
            base_price=venue.base_price,
            advance_amount=venue.advance_amount,
            amounts_per_slot=amounts_per_slot,
        )

        compensations = CompensationStack()
        try:
            await self._reserve_slots(slots=slots, compensations=compensations)
            bookings = await self._create_bookings(
                venue=venue,
                slots=slots,
                charges=charges,
                payer=payer,
                compensations=compensations,
            )
        except Exception as e:
            failed = await compensations.unwind()
            if failed:
                Logger.base.error(
                    f'⚠️ [RESERVE] Rollback incomplete for venue {venue_id}, left to reconcile: {failed}'
                )
            if isinstance(e, WriteFailureError):
                raise WriteFailureError(
                    'Reservation could not be completed, no slots were booked'
                ) from e
            raise
        compensations.discard()

        total_remaining = sum(charge.remaining for charge in charges)
        result = ReservationResult(
            booking_ids=[booking.id for booking in bookings],
            slot_ids=list(slot_ids),
            total_charged=amount,
            total_remaining=total_remaining,
        )
        Logger.base.info(
            f'✅ [RESERVE] venue={venue_id} user={payer.id} slots={slot_ids} '
            f'charged={amount} remaining={total_remaining}'
        )

        await self._notify(venue=venue, slots=slots, payer=payer, result=result)
        return result

    async def _load_free_slots(self, *, venue_id: int, slot_ids: List[int]) -> List[Slot]:
        found = {
            slot.id: slot
            for slot in await self.slot_reservation_repo.get_by_ids_for_venue(
                venue_id=venue_id, slot_ids=slot_ids
            )
        }
        missing = [slot_id for slot_id in slot_ids if slot_id not in found]
        if missing:
            raise PartialInventoryError(
                'Some slots do not exist for this venue', missing_slot_ids=missing
            )

        booked = [slot_id for slot_id in slot_ids if found[slot_id].is_booked]
        if booked:
            raise ConflictError('Some slots are already booked', conflicting_slot_ids=booked)

        return [found[slot_id] for slot_id in slot_ids]

    async def _reserve_slots(self, *, slots: List[Slot], compensations: CompensationStack) -> None:
        reserved_at = self.clock()
        lost: List[int] = []
        for slot in slots:
            slot_id = slot.id or 0
            if await self.slot_reservation_repo.try_reserve(slot_id=slot_id, reserved_at=reserved_at):
                compensations.push(
                    description=f'release slot {slot_id}',
                    operation='release_slot',
                    undo=partial(self.slot_reservation_repo.release, slot_id=slot_id),
                )
            else:
                lost.append(slot_id)

        if lost:
            Logger.base.warning(f'🏁 [RESERVE] Lost race for slots {lost}')
            raise ConflictError('Some slots are already booked', conflicting_slot_ids=lost)

    async def _create_bookings(
        self,
        *,
        venue: Venue,
        slots: List[Slot],
        charges: List[SlotCharge],
        payer: UserEntity,
        compensations: CompensationStack,
    ) -> List[Booking]:
        bookings: List[Booking] = []
        for slot, charge in zip(slots, charges, strict=True):
            booking = await self.booking_command_repo.create(
                booking=Booking.create(
                    user_id=payer.id,
                    venue_id=venue.id or 0,
                    slot_id=slot.id or 0,
                    amount_received=charge.received,
                    amount_remaining=charge.remaining,
                    payer_name=payer.name,
                    payer_email=payer.email,
                )
            )
            compensations.push(
                description=f'delete booking {booking.id}',
                operation='delete_booking',
                undo=partial(self.booking_command_repo.delete, booking_id=booking.id),
            )
            bookings.append(booking)
        return bookings

    async def _notify(
        self, *, venue: Venue, slots: List[Slot], payer: UserEntity, result: ReservationResult
    ) -> None:
        if not payer.email:
            Logger.base.info(f'📭 [RESERVE] No email for user {payer.id}, confirmation skipped')
            return

        confirmation = BookingConfirmation(
            recipient_email=payer.email,
            recipient_name=payer.name,
            venue_name=venue.name,
            venue_location=venue.location,
            booking_ids=result.booking_ids,
            slot_times=[slot.describe() for slot in slots],
            advance_paid=result.total_charged,
            remaining=result.total_remaining,
        )
        try:
            await self.notification_sender.send_booking_confirmation(confirmation=confirmation)
        except Exception as e:
            Logger.base.error(f'📧 [RESERVE] Confirmation for {result.booking_ids} not sent: {e}')
