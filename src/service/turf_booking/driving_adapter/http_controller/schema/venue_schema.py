import datetime as dt
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.service.turf_booking.domain.entity.slot_entity import Slot
from src.service.turf_booking.domain.entity.venue_entity import Venue


class LunchBreakSchema(BaseModel):
    from_hour: int = Field(ge=0, le=24)
    to_hour: int = Field(ge=0, le=24)


class PinLocationSchema(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class VenueCreateRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'name': 'Green Field Arena',
                'location': 'Koramangala, Bengaluru',
                'sport': 'football',
                'base_price': 1200,
                'advance_amount': 300,
                'open_hour': 6,
                'close_hour': 23,
                'slot_duration': 60,
                'lunch_break': {'from_hour': 13, 'to_hour': 14},
                'pin_location': {'lat': 12.9352, 'lng': 77.6245},
            }
        }
    }

    name: str = Field(min_length=1, max_length=255)
    location: str = Field(min_length=1, max_length=255)
    sport: str = Field(min_length=1, max_length=50)
    base_price: int = Field(gt=0)
    advance_amount: int = Field(ge=0)
    open_hour: int = Field(ge=0, le=24)
    close_hour: int = Field(ge=0, le=24)
    slot_duration: int = Field(gt=0)  # minutes
    lunch_break: Optional[LunchBreakSchema] = None
    pin_location: Optional[PinLocationSchema] = None
    image_url: Optional[str] = None


class VenueResponse(BaseModel):
    id: int
    owner_id: int
    name: str
    location: str
    sport: str
    base_price: int
    advance_amount: int
    open_hour: int
    close_hour: int
    slot_duration: int
    lunch_break: Optional[LunchBreakSchema] = None
    pin_location: Optional[PinLocationSchema] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, venue: Venue) -> 'VenueResponse':
        return cls(
            id=venue.id or 0,
            owner_id=venue.owner_id,
            name=venue.name,
            location=venue.location,
            sport=venue.sport,
            base_price=venue.base_price,
            advance_amount=venue.advance_amount,
            open_hour=venue.open_hour,
            close_hour=venue.close_hour,
            slot_duration=venue.slot_duration,
            lunch_break=(
                LunchBreakSchema(
                    from_hour=venue.lunch_break.from_hour, to_hour=venue.lunch_break.to_hour
                )
                if venue.lunch_break
                else None
            ),
            pin_location=(
                PinLocationSchema(lat=venue.pin_location.lat, lng=venue.pin_location.lng)
                if venue.pin_location
                else None
            ),
            image_url=venue.image_url,
            created_at=venue.created_at,
        )


class SlotGenerateRequest(BaseModel):
    date: dt.date
    from_hour: int = Field(ge=0, le=24)
    to_hour: int = Field(ge=0, le=24)


class SlotResponse(BaseModel):
    id: int
    venue_id: int
    date: dt.date
    start_hour: int
    end_hour: int
    start_minute: int
    end_minute: int
    time_range: str
    is_booked: bool

    @classmethod
    def from_entity(cls, slot: Slot) -> 'SlotResponse':
        return cls(
            id=slot.id or 0,
            venue_id=slot.venue_id,
            date=slot.date,
            start_hour=slot.start_hour,
            end_hour=slot.end_hour,
            start_minute=slot.start_minute,
            end_minute=slot.end_minute,
            time_range=slot.time_range,
            is_booked=slot.is_booked,
        )


class SlotListResponse(BaseModel):
    slots: List[SlotResponse]
