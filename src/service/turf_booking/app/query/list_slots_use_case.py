from datetime import date
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_slot_inventory_repo import ISlotInventoryRepo
from src.service.turf_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.turf_booking.domain.entity.slot_entity import Slot


class ListSlotsUseCase:
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

    @Logger.io(truncate_content=True)
    async def execute(self, *, venue_id: int, slot_date: Optional[date] = None) -> List[Slot]:
        if await self.venue_query_repo.get_by_id(venue_id=venue_id) is None:
            raise NotFoundError('Venue not found')
        return await self.slot_inventory_repo.list_by_venue(venue_id=venue_id, slot_date=slot_date)
