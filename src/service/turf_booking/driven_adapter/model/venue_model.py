from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


class VenueModel(Base):
    __tablename__ = 'venue'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    sport: Mapped[str] = mapped_column(String(50), nullable=False)
    base_price: Mapped[int] = mapped_column(Integer, nullable=False)
    advance_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    open_hour: Mapped[int] = mapped_column(Integer, nullable=False)
    close_hour: Mapped[int] = mapped_column(Integer, nullable=False)
    slot_duration: Mapped[int] = mapped_column(Integer, nullable=False)
    lunch_from_hour: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    lunch_to_hour: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    pin_lat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    pin_lng: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
