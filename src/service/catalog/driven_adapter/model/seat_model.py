from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class SeatModel(Base):
    __tablename__ = 'seat'
    __table_args__ = (UniqueConstraint('screen_id', 'row_name', 'seat_position'),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    screen_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey('screen.id', ondelete='CASCADE'), nullable=False, index=True
    )
    row_name: Mapped[str] = mapped_column(String(1), nullable=False)
    seat_position: Mapped[int] = mapped_column(Integer, nullable=False)
    seat_type: Mapped[str] = mapped_column(String(20), nullable=False, default='STANDARD')
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
