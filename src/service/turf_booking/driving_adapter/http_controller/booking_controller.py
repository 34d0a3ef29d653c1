from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.turf_booking.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.turf_booking.app.command.reserve_slots_use_case import ReserveSlotsUseCase
from src.service.turf_booking.app.command.settle_booking_use_case import SettleBookingUseCase
from src.service.turf_booking.app.query.get_receipt_use_case import GetReceiptUseCase
from src.service.turf_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.turf_booking.domain.entity.user_entity import UserEntity
from src.service.turf_booking.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_owner,
)
from src.service.turf_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
    BookingWithDetailsResponse,
    CancellationResponse,
    ReceiptResponse,
    ReservationResponse,
    ReserveSlotsRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def reserve_slots(
    request: ReserveSlotsRequest,
    idempotency_key: Optional[str] = Header(None, alias='Idempotency-Key', max_length=255),
    current_user: UserEntity = Depends(get_current_user),
    use_case: ReserveSlotsUseCase = Depends(ReserveSlotsUseCase.depends),
) -> ReservationResponse:
    with tracer.start_as_current_span('controller.reserve_slots') as span:
        span.set_attribute('venue_id', request.venue_id)
        span.set_attribute('user_id', current_user.id)
        result = await use_case.execute(
            venue_id=request.venue_id,
            slot_ids=request.slot_ids,
            amount=request.amount,
            payer=current_user,
            idempotency_token=idempotency_key,
            amounts_per_slot=request.amounts_per_slot,
        )
        return ReservationResponse.from_result(result)


@router.get('/my_booking')
@Logger.io
async def list_my_bookings(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingWithDetailsResponse]:
    """Users see their own bookings, owners see bookings on their venues"""
    details = await use_case.execute(requester=current_user)
    return [BookingWithDetailsResponse.from_detail(detail) for detail in details]


@router.delete('/{booking_id}')
@Logger.io
async def cancel_booking(
    booking_id: UUID,
    reason: Optional[str] = None,
    current_user: UserEntity = Depends(get_current_user),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> CancellationResponse:
    result = await use_case.execute(booking_id=booking_id, requester=current_user, reason=reason)
    return CancellationResponse.from_result(result)


@router.patch('/{booking_id}/settle')
@Logger.io
async def settle_booking(
    booking_id: UUID,
    current_user: UserEntity = Depends(require_owner),
    use_case: SettleBookingUseCase = Depends(SettleBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.execute(booking_id=booking_id, requester=current_user)
    return BookingResponse.from_entity(booking)


@router.get('/{booking_id}/receipt')
@Logger.io
async def get_receipt(
    booking_id: UUID,
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetReceiptUseCase = Depends(GetReceiptUseCase.depends),
) -> ReceiptResponse:
    receipt = await use_case.execute(booking_id=booking_id, requester=current_user)
    return ReceiptResponse.from_receipt(receipt)
