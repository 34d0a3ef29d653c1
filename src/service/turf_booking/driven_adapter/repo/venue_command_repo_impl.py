from sqlalchemy import delete

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_venue_command_repo import IVenueCommandRepo
from src.service.turf_booking.domain.entity.venue_entity import Venue
from src.service.turf_booking.driven_adapter.model.venue_model import VenueModel
from src.service.turf_booking.driven_adapter.repo.entity_mapper import to_venue
from src.service.turf_booking.driven_adapter.repo.sqlalchemy_repo_base import SqlAlchemyRepoBase


class VenueCommandRepoImpl(SqlAlchemyRepoBase, IVenueCommandRepo):
    @Logger.io
    async def create(self, *, venue: Venue) -> Venue:
        async with self._write_session('create venue') as session:
            db_venue = VenueModel(
                owner_id=venue.owner_id,
                name=venue.name,
                location=venue.location,
                sport=venue.sport,
                base_price=venue.base_price,
                advance_amount=venue.advance_amount,
                open_hour=venue.open_hour,
                close_hour=venue.close_hour,
                slot_duration=venue.slot_duration,
                lunch_from_hour=venue.lunch_break.from_hour if venue.lunch_break else None,
                lunch_to_hour=venue.lunch_break.to_hour if venue.lunch_break else None,
                pin_lat=venue.pin_location.lat if venue.pin_location else None,
                pin_lng=venue.pin_location.lng if venue.pin_location else None,
                image_url=venue.image_url,
            )
            session.add(db_venue)
            await session.flush()
            await session.refresh(db_venue)
            return to_venue(db_venue)

    @Logger.io
    async def delete(self, *, venue_id: int) -> bool:
        async with self._write_session('delete venue') as session:
            result = await session.execute(delete(VenueModel).where(VenueModel.id == venue_id))
            return result.rowcount > 0  # type: ignore[attr-defined]
