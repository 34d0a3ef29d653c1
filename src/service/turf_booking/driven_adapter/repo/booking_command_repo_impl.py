from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, insert, update

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.turf_booking.domain.entity.booking_entity import Booking
from src.service.turf_booking.driven_adapter.model.booking_model import BookingModel
from src.service.turf_booking.driven_adapter.model.slot_model import SlotModel
from src.service.turf_booking.driven_adapter.repo.sqlalchemy_repo_base import SqlAlchemyRepoBase


class BookingCommandRepoImpl(SqlAlchemyRepoBase, IBookingCommandRepo):
    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self._write_session(f'create booking for slot {booking.slot_id}') as session:
            await session.execute(
                insert(BookingModel).values(
                    id=booking.id,
                    user_id=booking.user_id,
                    venue_id=booking.venue_id,
                    slot_id=booking.slot_id,
                    payer_name=booking.payer_name,
                    payer_email=booking.payer_email,
                    status=booking.status.value,
                    amount_received=booking.amount_received,
                    amount_remaining=booking.amount_remaining,
                    is_payment_received=booking.is_payment_received,
                    created_at=booking.created_at,
                    updated_at=booking.updated_at,
                )
            )
            linked = await session.execute(
                update(SlotModel)
                .where(
                    SlotModel.id == booking.slot_id,
                    SlotModel.is_booked.is_(True),
                    SlotModel.booking_id.is_(None),
                )
                .values(booking_id=booking.id)
                .execution_options(synchronize_session=False)
            )
            if linked.rowcount != 1:  # type: ignore[attr-defined]
                # Leaving the block without commit rolls the insert back
                raise ConflictError(
                    f'Slot {booking.slot_id} is not held for this booking',
                    conflicting_slot_ids=[booking.slot_id],
                )
            return booking

    @Logger.io
    async def delete(self, *, booking_id: UUID) -> bool:
        async with self._write_session(f'delete booking {booking_id}') as session:
            result = await session.execute(
                delete(BookingModel).where(BookingModel.id == booking_id).returning(BookingModel.slot_id)
            )
            slot_id = result.scalar_one_or_none()
            if slot_id is None:
                return False
            await session.execute(
                update(SlotModel)
                .where(SlotModel.id == slot_id, SlotModel.booking_id == booking_id)
                .values(booking_id=None)
                .execution_options(synchronize_session=False)
            )
            return True

    @Logger.io
    async def update_payment(self, *, booking: Booking) -> Booking:
        async with self._write_session(f'update payment of booking {booking.id}') as session:
            await session.execute(
                update(BookingModel)
                .where(BookingModel.id == booking.id)
                .values(
                    amount_received=booking.amount_received,
                    amount_remaining=booking.amount_remaining,
                    is_payment_received=booking.is_payment_received,
                    updated_at=booking.updated_at or datetime.now(timezone.utc),
                )
                .execution_options(synchronize_session=False)
            )
            return booking

    @Logger.io
    async def delete_by_venue(self, *, venue_id: int) -> int:
        async with self._write_session(f'delete bookings of venue {venue_id}') as session:
            result = await session.execute(
                delete(BookingModel).where(BookingModel.venue_id == venue_id)
            )
            return result.rowcount  # type: ignore[attr-defined]
