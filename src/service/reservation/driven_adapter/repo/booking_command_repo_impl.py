from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.clock import ensure_utc
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.reservation.domain.entity.booking_entity import Booking
from src.service.reservation.domain.enum.booking_status import BookingStatus
from src.service.reservation.driven_adapter.model.booking_model import BookingModel


def to_booking(db_booking: BookingModel) -> Booking:
    return Booking(
        id=db_booking.id,
        user_id=db_booking.user_id,
        showtime_id=db_booking.showtime_id,
        expires_at=ensure_utc(db_booking.expires_at),
        status=BookingStatus(db_booking.status),
        seat_count=db_booking.seat_count,
        total_price=db_booking.total_price,
        confirmed_at=ensure_utc(db_booking.confirmed_at) if db_booking.confirmed_at else None,
        created_at=ensure_utc(db_booking.created_at) if db_booking.created_at else None,
        updated_at=ensure_utc(db_booking.updated_at) if db_booking.updated_at else None,
    )


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        self.session.add(
            BookingModel(
                id=booking.id,
                user_id=booking.user_id,
                showtime_id=booking.showtime_id,
                status=booking.status.value,
                seat_count=booking.seat_count,
                total_price=booking.total_price,
                expires_at=booking.expires_at,
                created_at=booking.created_at,
                updated_at=booking.updated_at,
            )
        )
        await self.session.flush()
        return booking

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID, for_update: bool = False) -> Optional[Booking]:
        stmt = select(BookingModel).where(BookingModel.id == booking_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        db_booking = result.scalar_one_or_none()
        return to_booking(db_booking) if db_booking else None

    @Logger.io
    async def update(self, *, booking: Booking) -> Booking:
        await self.session.execute(
            update(BookingModel)
            .where(BookingModel.id == booking.id)
            .values(
                status=booking.status.value,
                seat_count=booking.seat_count,
                total_price=booking.total_price,
                confirmed_at=booking.confirmed_at,
                updated_at=booking.updated_at,
            )
        )
        return booking

    @Logger.io
    async def list_lapsed_pending_ids(self, *, now: datetime) -> List[UUID]:
        result = await self.session.execute(
            select(BookingModel.id)
            .where(
                BookingModel.status == BookingStatus.PENDING.value,
                BookingModel.expires_at < now,
            )
            .order_by(BookingModel.expires_at)
        )
        return list(result.scalars().all())

    @Logger.io
    async def count_active_for_showtime(self, *, showtime_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(BookingModel)
            .where(
                BookingModel.showtime_id == showtime_id,
                BookingModel.status.in_(
                    [BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value]
                ),
            )
        )
        return result.scalar_one()
