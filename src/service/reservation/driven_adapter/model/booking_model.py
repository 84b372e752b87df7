from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, Index, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


class BookingModel(Base):
    __tablename__ = 'booking'
    __table_args__ = (Index('ix_booking_status_expires_at', 'status', 'expires_at'),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    # No FK: cancelled and expired bookings outlive a removed showtime
    showtime_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), default='PENDING', nullable=False)
    seat_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    confirmed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
