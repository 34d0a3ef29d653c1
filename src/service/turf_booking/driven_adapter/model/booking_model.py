from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class BookingModel(Base):
    __tablename__ = 'booking'

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    venue_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('venue.id', ondelete='CASCADE'), nullable=False, index=True
    )
    # One booking per slot
    slot_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('slot.id', ondelete='CASCADE'), nullable=False, unique=True
    )
    payer_name: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    payer_email: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='pending')
    amount_received: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    amount_remaining: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_payment_received: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
