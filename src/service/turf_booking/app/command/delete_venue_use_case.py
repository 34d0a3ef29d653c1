from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.turf_booking.domain.entity.user_entity import UserEntity


class DeleteVenueUseCase:
    """Remove a venue with all of its slots and bookings in one transaction"""

    def __init__(
        self,
        *,
        venue_query_repo: IVenueQueryRepo,
        uow_factory: Callable[[], AbstractUnitOfWork],
    ) -> None:
        self.venue_query_repo = venue_query_repo
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo]),
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
    ) -> Self:
        return cls(venue_query_repo=venue_query_repo, uow_factory=uow_factory)

    @Logger.io
    async def execute(self, *, venue_id: int, requester: UserEntity) -> None:
        venue = await self.venue_query_repo.get_by_id(venue_id=venue_id)
        if venue is None:
            raise NotFoundError('Venue not found')
        if not (requester.is_admin or venue.is_owned_by(requester.id)):
            raise ForbiddenError('Only the venue owner can delete this venue')

        async with self.uow_factory() as uow:
            bookings = await uow.booking_command_repo.delete_by_venue(venue_id=venue_id)
            slots = await uow.slot_inventory_repo.delete_by_venue(venue_id=venue_id)
            await uow.venue_command_repo.delete(venue_id=venue_id)
            await uow.commit()

        Logger.base.info(
            f'🗑️ [VENUE] Deleted venue {venue_id} with {slots} slots and {bookings} bookings'
        )
