from datetime import date
from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_slot_inventory_repo import ISlotInventoryRepo
from src.service.turf_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.turf_booking.domain.entity.slot_entity import Slot
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.domain.slot_planning import plan_slots


class GenerateSlotsUseCase:
    def __init__(
        self, *, venue_query_repo: IVenueQueryRepo, slot_inventory_repo: ISlotInventoryRepo
    ) -> None:
        self.venue_query_repo = venue_query_repo
        self.slot_inventory_repo = slot_inventory_repo

    @classmethod
    @inject
    def depends(
        cls,
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
        slot_inventory_repo: ISlotInventoryRepo = Depends(Provide[Container.slot_inventory_repo]),
    ) -> Self:
        return cls(venue_query_repo=venue_query_repo, slot_inventory_repo=slot_inventory_repo)

    @Logger.io
    async def execute(
        self,
        *,
        venue_id: int,
        slot_date: date,
        from_hour: int,
        to_hour: int,
        requester: UserEntity,
    ) -> List[Slot]:
        venue = await self.venue_query_repo.get_by_id(venue_id=venue_id)
        if venue is None:
            raise NotFoundError('Venue not found')
        if not venue.is_owned_by(requester.id):
            raise ForbiddenError('Only the venue owner can add slots')

        existing = await self.slot_inventory_repo.get_start_minutes(
            venue_id=venue_id, slot_date=slot_date
        )
        planned = plan_slots(
            venue=venue, from_hour=from_hour, to_hour=to_hour, existing_start_minutes=existing
        )
        if not planned:
            Logger.base.info(f'📅 [SLOTS] Nothing new to create for venue {venue_id} on {slot_date}')
            return []

        created = await self.slot_inventory_repo.create_many(
            slots=[
                Slot(
                    venue_id=venue_id,
                    date=slot_date,
                    start_minute=position.start_minute,
                    end_minute=position.end_minute,
                )
                for position in planned
            ]
        )
        Logger.base.info(f'📅 [SLOTS] Created {len(created)} slots for venue {venue_id} on {slot_date}')
        return created
