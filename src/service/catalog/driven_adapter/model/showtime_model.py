from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


if TYPE_CHECKING:
    from src.service.catalog.driven_adapter.model.screen_model import ScreenModel


class ShowtimeModel(Base):
    __tablename__ = 'showtime'

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    movie_title: Mapped[str] = mapped_column(String(255), nullable=False)
    screen_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey('screen.id'), nullable=False, index=True
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    screen: Mapped['ScreenModel'] = relationship('ScreenModel', lazy='joined', viewonly=True)
