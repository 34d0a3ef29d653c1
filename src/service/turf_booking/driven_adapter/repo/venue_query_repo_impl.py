from typing import List, Optional

from sqlalchemy import select

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.turf_booking.domain.entity.venue_entity import Venue
from src.service.turf_booking.driven_adapter.model.venue_model import VenueModel
from src.service.turf_booking.driven_adapter.repo.entity_mapper import to_venue
from src.service.turf_booking.driven_adapter.repo.sqlalchemy_repo_base import SqlAlchemyRepoBase


class VenueQueryRepoImpl(SqlAlchemyRepoBase, IVenueQueryRepo):
    @Logger.io
    async def get_by_id(self, *, venue_id: int) -> Optional[Venue]:
        async with self._get_session() as session:
            db_venue = await session.get(VenueModel, venue_id)
            return to_venue(db_venue) if db_venue else None

    @Logger.io(truncate_content=True)
    async def list_all(self) -> List[Venue]:
        async with self._get_session() as session:
            result = await session.execute(select(VenueModel).order_by(VenueModel.id))
            return [to_venue(db_venue) for db_venue in result.scalars()]

    @Logger.io(truncate_content=True)
    async def list_by_owner(self, *, owner_id: int) -> List[Venue]:
        async with self._get_session() as session:
            result = await session.execute(
                select(VenueModel).where(VenueModel.owner_id == owner_id).order_by(VenueModel.id)
            )
            return [to_venue(db_venue) for db_venue in result.scalars()]
