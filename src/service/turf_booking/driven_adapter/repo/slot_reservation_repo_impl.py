"""
Compare-and-set writes on the slot reserved flag.

Every write is a single conditional UPDATE committed on its own, so a
reservation never holds row locks across the multi-slot coordination and two
coordinators racing for the same slot are decided by the row's current value.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy import ColumnElement, or_, select, update

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_slot_reservation_repo import ISlotReservationRepo
from src.service.turf_booking.domain.entity.slot_entity import Slot
from src.service.turf_booking.driven_adapter.model.slot_model import SlotModel
from src.service.turf_booking.driven_adapter.repo.entity_mapper import to_slot
from src.service.turf_booking.driven_adapter.repo.sqlalchemy_repo_base import SqlAlchemyRepoBase


def _reserved_before(instant: datetime) -> ColumnElement[bool]:
    # NULL reserved_at counts as old
    return or_(SlotModel.reserved_at.is_(None), SlotModel.reserved_at < instant)


class SlotReservationRepoImpl(SqlAlchemyRepoBase, ISlotReservationRepo):
    @Logger.io
    async def get_by_ids_for_venue(self, *, venue_id: int, slot_ids: Sequence[int]) -> List[Slot]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SlotModel).where(
                    SlotModel.venue_id == venue_id, SlotModel.id.in_(list(slot_ids))
                )
            )
            return [to_slot(db_slot) for db_slot in result.scalars()]

    @Logger.io
    async def get_by_id(self, *, slot_id: int) -> Optional[Slot]:
        async with self._get_session() as session:
            result = await session.execute(select(SlotModel).where(SlotModel.id == slot_id))
            db_slot = result.scalar_one_or_none()
            return to_slot(db_slot) if db_slot else None

    @Logger.io
    async def try_reserve(self, *, slot_id: int, reserved_at: datetime) -> bool:
        async with self._write_session(f'reserve slot {slot_id}') as session:
            result = await session.execute(
                update(SlotModel)
                .where(SlotModel.id == slot_id, SlotModel.is_booked.is_(False))
                .values(is_booked=True, reserved_at=reserved_at)
                .execution_options(synchronize_session=False)
            )
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io
    async def release(self, *, slot_id: int, reserved_before: Optional[datetime] = None) -> bool:
        stmt = update(SlotModel).where(
            SlotModel.id == slot_id,
            SlotModel.is_booked.is_(True),
            SlotModel.booking_id.is_(None),
        )
        if reserved_before is not None:
            stmt = stmt.where(_reserved_before(reserved_before))
        async with self._write_session(f'release slot {slot_id}') as session:
            result = await session.execute(
                stmt.values(is_booked=False, reserved_at=None).execution_options(
                    synchronize_session=False
                )
            )
            return result.rowcount == 1  # type: ignore[attr-defined]

    @Logger.io(truncate_content=True)
    async def find_orphaned_reservations(self, *, reserved_before: datetime) -> List[Slot]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SlotModel)
                .where(
                    SlotModel.is_booked.is_(True),
                    SlotModel.booking_id.is_(None),
                    _reserved_before(reserved_before),
                )
                .order_by(SlotModel.reserved_at)
            )
            return [to_slot(db_slot) for db_slot in result.scalars()]
