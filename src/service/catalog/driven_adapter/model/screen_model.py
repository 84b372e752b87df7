from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


class ScreenModel(Base):
    __tablename__ = 'screen'
    __table_args__ = (UniqueConstraint('cinema_name', 'name'),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)  # UUID7
    cinema_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
