import datetime as dt
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.service.turf_booking.app.dto.booking_detail import BookingDetail, Receipt
from src.service.turf_booking.app.dto.cancellation_result import CancellationResult
from src.service.turf_booking.app.dto.reservation_result import ReservationResult
from src.service.turf_booking.domain.entity.booking_entity import Booking


class ReserveSlotsRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'examples': [
                {'venue_id': 1, 'slot_ids': [11, 12], 'amount': 400},
                {'venue_id': 1, 'slot_ids': [11, 12], 'amount': 700, 'amounts_per_slot': [500, 200]},
            ]
        }
    }

    venue_id: int
    slot_ids: List[int] = Field(min_length=1)
    amount: int = Field(ge=0)
    amounts_per_slot: Optional[List[int]] = None


class ReservationResponse(BaseModel):
    booking_ids: List[UUID]
    slot_ids: List[int]
    total_charged: int
    total_remaining: int
    replayed: bool

    @classmethod
    def from_result(cls, result: ReservationResult) -> 'ReservationResponse':
        return cls(
            booking_ids=result.booking_ids,
            slot_ids=result.slot_ids,
            total_charged=result.total_charged,
            total_remaining=result.total_remaining,
            replayed=result.replayed,
        )


class CancellationResponse(BaseModel):
    cancelled_booking_id: UUID
    slot_released: bool
    reason: Optional[str] = None

    @classmethod
    def from_result(cls, result: CancellationResult) -> 'CancellationResponse':
        return cls(
            cancelled_booking_id=result.cancelled_booking_id,
            slot_released=result.slot_released,
            reason=result.reason,
        )


class BookingResponse(BaseModel):
    id: UUID
    user_id: int
    venue_id: int
    slot_id: int
    status: str
    amount_received: int
    amount_remaining: int
    is_payment_received: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, booking: Booking) -> 'BookingResponse':
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            venue_id=booking.venue_id,
            slot_id=booking.slot_id,
            status=booking.status.value,
            amount_received=booking.amount_received,
            amount_remaining=booking.amount_remaining,
            is_payment_received=booking.is_payment_received,
            created_at=booking.created_at,
        )


class BookingWithDetailsResponse(BookingResponse):
    venue_name: str
    venue_location: str
    sport: str
    date: dt.date
    time_range: str

    @classmethod
    def from_detail(cls, detail: BookingDetail) -> 'BookingWithDetailsResponse':
        base = BookingResponse.from_entity(detail.booking).model_dump()
        return cls(
            **base,
            venue_name=detail.venue_name,
            venue_location=detail.venue_location,
            sport=detail.sport,
            date=detail.slot_date,
            time_range=detail.time_range,
        )


class ReceiptResponse(BaseModel):
    booking_id: UUID
    payer_name: str
    payer_email: str
    venue_name: str
    location: str
    sport: str
    date: dt.date
    time_slot: str
    advance_paid: int
    remaining: int
    total: int
    booking_date: Optional[datetime] = None

    @classmethod
    def from_receipt(cls, receipt: Receipt) -> 'ReceiptResponse':
        return cls(
            booking_id=receipt.booking_id,
            payer_name=receipt.payer_name,
            payer_email=receipt.payer_email,
            venue_name=receipt.venue_name,
            location=receipt.location,
            sport=receipt.sport,
            date=receipt.date,
            time_slot=receipt.time_slot,
            advance_paid=receipt.advance_paid,
            remaining=receipt.remaining,
            total=receipt.total,
            booking_date=receipt.booking_date,
        )


class ReconcileResponse(BaseModel):
    released: int
