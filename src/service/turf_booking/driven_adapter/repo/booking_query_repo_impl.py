from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import Select, select

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.dto.booking_detail import BookingDetail
from src.service.turf_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.turf_booking.domain.entity.booking_entity import Booking
from src.service.turf_booking.driven_adapter.model.booking_model import BookingModel
from src.service.turf_booking.driven_adapter.model.slot_model import SlotModel
from src.service.turf_booking.driven_adapter.model.venue_model import VenueModel
from src.service.turf_booking.driven_adapter.repo.entity_mapper import to_booking, to_slot
from src.service.turf_booking.driven_adapter.repo.sqlalchemy_repo_base import SqlAlchemyRepoBase


class BookingQueryRepoImpl(SqlAlchemyRepoBase, IBookingQueryRepo):
    @staticmethod
    def _detail_query() -> Select:
        return (
            select(BookingModel, SlotModel, VenueModel)
            .join(SlotModel, SlotModel.id == BookingModel.slot_id)
            .join(VenueModel, VenueModel.id == BookingModel.venue_id)
        )

    @staticmethod
    def _to_detail(db_booking: BookingModel, db_slot: SlotModel, db_venue: VenueModel) -> BookingDetail:
        slot = to_slot(db_slot)
        return BookingDetail(
            booking=to_booking(db_booking),
            venue_name=db_venue.name,
            venue_location=db_venue.location,
            venue_owner_id=db_venue.owner_id,
            sport=db_venue.sport,
            slot_date=slot.date,
            time_range=slot.time_range,
            slot_start_minute=slot.start_minute,
        )

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self._get_session() as session:
            db_booking = await session.get(BookingModel, booking_id)
            return to_booking(db_booking) if db_booking else None

    @Logger.io
    async def get_detail(self, *, booking_id: UUID) -> Optional[BookingDetail]:
        async with self._get_session() as session:
            result = await session.execute(
                self._detail_query().where(BookingModel.id == booking_id)
            )
            row = result.one_or_none()
            return self._to_detail(*row) if row else None

    @Logger.io(truncate_content=True)
    async def list_for_user(self, *, user_id: int) -> List[BookingDetail]:
        async with self._get_session() as session:
            result = await session.execute(
                self._detail_query()
                .where(BookingModel.user_id == user_id)
                .order_by(BookingModel.created_at.desc())
            )
            return [self._to_detail(*row) for row in result.all()]

    @Logger.io(truncate_content=True)
    async def list_for_owner(self, *, owner_id: int) -> List[BookingDetail]:
        async with self._get_session() as session:
            result = await session.execute(
                self._detail_query()
                .where(VenueModel.owner_id == owner_id)
                .order_by(BookingModel.created_at.desc())
            )
            return [self._to_detail(*row) for row in result.all()]

    @Logger.io
    async def list_for_slots(self, *, slot_ids: Sequence[int]) -> List[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.slot_id.in_(slot_ids))
            )
            return [to_booking(db_booking) for db_booking in result.scalars().all()]
