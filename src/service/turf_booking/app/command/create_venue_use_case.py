from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.interface.i_venue_command_repo import IVenueCommandRepo
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.domain.entity.venue_entity import Venue
from src.service.turf_booking.domain.value_object.venue_hours import LunchBreak, PinLocation


class CreateVenueUseCase:
    def __init__(self, *, venue_command_repo: IVenueCommandRepo) -> None:
        self.venue_command_repo = venue_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        venue_command_repo: IVenueCommandRepo = Depends(Provide[Container.venue_command_repo]),
    ) -> Self:
        return cls(venue_command_repo=venue_command_repo)

    @Logger.io
    async def execute(
        self,
        *,
        owner: UserEntity,
        name: str,
        location: str,
        sport: str,
        base_price: int,
        advance_amount: int,
        open_hour: int,
        close_hour: int,
        slot_duration: int,
        lunch_break: Optional[LunchBreak] = None,
        pin_location: Optional[PinLocation] = None,
        image_url: Optional[str] = None,
    ) -> Venue:
        if not (owner.is_owner or owner.is_admin):
            raise ForbiddenError('Only venue owners can create venues')

        venue = Venue.create(
            owner_id=owner.id,
            name=name,
            location=location,
            sport=sport,
            base_price=base_price,
            advance_amount=advance_amount,
            open_hour=open_hour,
            close_hour=close_hour,
            slot_duration=slot_duration,
            lunch_break=lunch_break,
            pin_location=pin_location,
            image_url=image_url,
        )
        created = await self.venue_command_repo.create(venue=venue)
        Logger.base.info(f'🏟️ [VENUE] Created venue {created.id} for owner {owner.id}')
        return created
