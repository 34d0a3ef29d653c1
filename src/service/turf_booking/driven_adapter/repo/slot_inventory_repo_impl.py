from datetime import date
from typing import List, Optional

from sqlalchemy import delete, select

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_slot_inventory_repo import ISlotInventoryRepo
from src.service.turf_booking.domain.entity.slot_entity import Slot
from src.service.turf_booking.driven_adapter.model.slot_model import SlotModel
from src.service.turf_booking.driven_adapter.repo.entity_mapper import to_slot
from src.service.turf_booking.driven_adapter.repo.sqlalchemy_repo_base import SqlAlchemyRepoBase


class SlotInventoryRepoImpl(SqlAlchemyRepoBase, ISlotInventoryRepo):
    @Logger.io(truncate_content=True)
    async def create_many(self, *, slots: List[Slot]) -> List[Slot]:
        async with self._write_session('create slots') as session:
            db_slots = [
                SlotModel(
                    venue_id=slot.venue_id,
                    slot_date=slot.date,
                    start_minute=slot.start_minute,
                    end_minute=slot.end_minute,
                    is_booked=False,
                )
                for slot in slots
            ]
            session.add_all(db_slots)
            await session.flush()
            for db_slot in db_slots:
                await session.refresh(db_slot)
            return [to_slot(db_slot) for db_slot in db_slots]

    @Logger.io(truncate_content=True)
    async def list_by_venue(self, *, venue_id: int, slot_date: Optional[date] = None) -> List[Slot]:
        stmt = select(SlotModel).where(SlotModel.venue_id == venue_id)
        if slot_date is not None:
            stmt = stmt.where(SlotModel.slot_date == slot_date)
        stmt = stmt.order_by(SlotModel.slot_date, SlotModel.start_minute)
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [to_slot(db_slot) for db_slot in result.scalars()]

    @Logger.io
    async def get_start_minutes(self, *, venue_id: int, slot_date: date) -> set[int]:
        async with self._get_session() as session:
            result = await session.execute(
                select(SlotModel.start_minute).where(
                    SlotModel.venue_id == venue_id, SlotModel.slot_date == slot_date
                )
            )
            return set(result.scalars())

    @Logger.io
    async def get_by_id(self, *, slot_id: int) -> Optional[Slot]:
        async with self._get_session() as session:
            db_slot = await session.get(SlotModel, slot_id)
            return to_slot(db_slot) if db_slot else None

    @Logger.io
    async def delete_if_free(self, *, slot_id: int) -> bool:
        async with self._write_session('delete slot') as session:
            result = await session.execute(
                delete(SlotModel).where(SlotModel.id == slot_id, SlotModel.is_booked.is_(False))
            )
            return result.rowcount > 0  # type: ignore[attr-defined]

    @Logger.io
    async def delete_by_venue(self, *, venue_id: int) -> int:
        async with self._write_session('delete venue slots') as session:
            result = await session.execute(delete(SlotModel).where(SlotModel.venue_id == venue_id))
            return result.rowcount  # type: ignore[attr-defined]
