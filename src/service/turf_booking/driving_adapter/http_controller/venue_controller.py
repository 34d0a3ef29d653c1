from typing import List, Optional

import datetime as dt
from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.command.create_venue_use_case import CreateVenueUseCase
from src.service.turf_booking.app.command.delete_venue_use_case import DeleteVenueUseCase
from src.service.turf_booking.app.command.generate_slots_use_case import GenerateSlotsUseCase
from src.service.turf_booking.app.query.get_venue_use_case import GetVenueUseCase
from src.service.turf_booking.app.query.list_slots_use_case import ListSlotsUseCase
from src.service.turf_booking.app.query.list_venues_use_case import ListVenuesUseCase
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.domain.value_object.venue_hours import LunchBreak, PinLocation
from src.service.turf_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_owner,
)
from src.service.turf_booking.driving_adapter.http_controller.schema.venue_schema import (
    SlotGenerateRequest,
    SlotListResponse,
    SlotResponse,
    VenueCreateRequest,
    VenueResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_venue(
    request: VenueCreateRequest,
    current_user: UserEntity = Depends(require_owner),
    use_case: CreateVenueUseCase = Depends(CreateVenueUseCase.depends),
) -> VenueResponse:
    venue = await use_case.execute(
        owner=current_user,
        name=request.name,
        location=request.location,
        sport=request.sport,
        base_price=request.base_price,
        advance_amount=request.advance_amount,
        open_hour=request.open_hour,
        close_hour=request.close_hour,
        slot_duration=request.slot_duration,
        lunch_break=(
            LunchBreak(from_hour=request.lunch_break.from_hour, to_hour=request.lunch_break.to_hour)
            if request.lunch_break
            else None
        ),
        pin_location=(
            PinLocation(lat=request.pin_location.lat, lng=request.pin_location.lng)
            if request.pin_location
            else None
        ),
        image_url=request.image_url,
    )
    return VenueResponse.from_entity(venue)


@router.get('')
@Logger.io
async def list_venues(
    mine: bool = False,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListVenuesUseCase = Depends(ListVenuesUseCase.depends),
) -> List[VenueResponse]:
    venues = (
        await use_case.list_owned(owner_id=current_user.id) if mine else await use_case.list_all()
    )
    return [VenueResponse.from_entity(venue) for venue in venues]


@router.get('/{venue_id}')
@Logger.io
async def get_venue(
    venue_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetVenueUseCase = Depends(GetVenueUseCase.depends),
) -> VenueResponse:
    return VenueResponse.from_entity(await use_case.execute(venue_id=venue_id))


@router.delete('/{venue_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def delete_venue(
    venue_id: int,
    current_user: UserEntity = Depends(get_current_user),
    use_case: DeleteVenueUseCase = Depends(DeleteVenueUseCase.depends),
) -> None:
    await use_case.execute(venue_id=venue_id, requester=current_user)


@router.post('/{venue_id}/slots', status_code=status.HTTP_201_CREATED)
@Logger.io
async def generate_slots(
    venue_id: int,
    request: SlotGenerateRequest,
    current_user: UserEntity = Depends(require_owner),
    use_case: GenerateSlotsUseCase = Depends(GenerateSlotsUseCase.depends),
) -> SlotListResponse:
    slots = await use_case.execute(
        venue_id=venue_id,
        slot_date=request.date,
        from_hour=request.from_hour,
        to_hour=request.to_hour,
        requester=current_user,
    )
    return SlotListResponse(slots=[SlotResponse.from_entity(slot) for slot in slots])


@router.get('/{venue_id}/slots')
@Logger.io
async def list_slots(
    venue_id: int,
    date: Optional[dt.date] = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListSlotsUseCase = Depends(ListSlotsUseCase.depends),
) -> SlotListResponse:
    slots = await use_case.execute(venue_id=venue_id, slot_date=date)
    return SlotListResponse(slots=[SlotResponse.from_entity(slot) for slot in slots])
