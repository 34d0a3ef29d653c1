from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_venue_query_repo import IVenueQueryRepo
from src.service.turf_booking.domain.entity.venue_entity import Venue


class ListVenuesUseCase:
    def __init__(self, *, venue_query_repo: IVenueQueryRepo) -> None:
        self.venue_query_repo = venue_query_repo

    @classmethod
    @inject
    def depends(
        cls, venue_query_repo: IVenueQueryRepo = Depends(Provide[Container.venue_query_repo])
    ) -> Self:
        return cls(venue_query_repo=venue_query_repo)

    @Logger.io(truncate_content=True)
    async def list_all(self) -> List[Venue]:
        return await self.venue_query_repo.list_all()

    @Logger.io(truncate_content=True)
    async def list_owned(self, *, owner_id: int) -> List[Venue]:
        return await self.venue_query_repo.list_by_owner(owner_id=owner_id)
