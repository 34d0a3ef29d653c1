from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_slot_inventory_repo import ISlotInventoryRepo
from src.service.turf_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.turf_booking.domain.entity.user_entity import UserEntity


class DeleteSlotUseCase:
    def __init__(
        self, *, slot_inventory_repo: ISlotInventoryRepo, venue_query_repo: IVenueQueryRepo
    ) -> None:
        self.slot_inventory_repo = slot_inventory_repo
        self.venue_query_repo = venue_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        slot_inventory_repo: ISlotInventoryRepo = Depends(Provide[Container.slot_inventory_repo]),
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
    ) -> Self:
        return cls(slot_inventory_repo=slot_inventory_repo, venue_query_repo=venue_query_repo)

    @Logger.io
    async def execute(self, *, slot_id: int, requester: UserEntity) -> None:
        slot = await self.slot_inventory_repo.get_by_id(slot_id=slot_id)
        if slot is None:
            raise NotFoundError('Slot not found')
        venue = await self.venue_query_repo.get_by_id(venue_id=slot.venue_id)
        if venue is None or not venue.is_owned_by(requester.id):
            raise ForbiddenError('Only the venue owner can delete slots')
        if slot.is_booked:
            raise ConflictError('Cannot delete a booked slot', conflicting_slot_ids=[slot_id])

        # The flag may flip between the read above and the delete
        if not await self.slot_inventory_repo.delete_if_free(slot_id=slot_id):
            raise ConflictError('Cannot delete a booked slot', conflicting_slot_ids=[slot_id])
