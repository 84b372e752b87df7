from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Numeric, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


class SeatSlotModel(Base):
    __tablename__ = 'seat_slot'
    __table_args__ = (UniqueConstraint('seat_id', 'showtime_id'),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    seat_id: Mapped[UUID] = mapped_column(Uuid, ForeignKey('seat.id'), nullable=False)
    showtime_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey('showtime.id', ondelete='CASCADE'), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), default='AVAILABLE', nullable=False)
    booking_id: Mapped[Optional[UUID]] = mapped_column(
        Uuid, ForeignKey('booking.id'), nullable=True, index=True
    )
    held_until: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
