from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    SmallInteger,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class ReviewModel(Base):
    __tablename__ = 'review'
    __table_args__ = (
        Index('ix_review_venue_created', 'venue_id', 'created_at'),
        CheckConstraint('rating BETWEEN 1 AND 5', name='ck_review_rating_range'),
    )

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    venue_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('venue.id', ondelete='CASCADE'), nullable=False
    )
    # One review per booking; cancelling the booking drops its review
    booking_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey('booking.id', ondelete='CASCADE'),
        nullable=False,
        unique=True,
    )
    rating: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    reviewer_name: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
