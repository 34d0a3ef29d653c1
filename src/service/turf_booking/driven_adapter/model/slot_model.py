from datetime import date, datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class SlotModel(Base):
    __tablename__ = 'slot'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    venue_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('venue.id', ondelete='CASCADE'), nullable=False
    )
    slot_date: Mapped[date] = mapped_column('date', Date, nullable=False)
    start_minute: Mapped[int] = mapped_column(Integer, nullable=False)
    end_minute: Mapped[int] = mapped_column(Integer, nullable=False)
    is_booked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Not a FK: booking.slot_id already enforces the link, this is a denormalized back-pointer
    booking_id: Mapped[Optional[UUID]] = mapped_column(PG_UUID(as_uuid=True), nullable=True)
    reserved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint('venue_id', 'date', 'start_minute', name='uq_slot_venue_date_start'),
        Index('ix_slot_venue_date', 'venue_id', 'date'),
        Index(
            'ix_slot_orphan_scan',
            'reserved_at',
            postgresql_where=text('is_booked AND booking_id IS NULL'),
        ),
    )
