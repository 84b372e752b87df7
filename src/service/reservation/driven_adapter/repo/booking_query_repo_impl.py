from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.clock import ensure_utc
from src.platform.logging.loguru_io import Logger
from src.service.catalog.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.reservation.app.dto.booking_dto import BookingCard
from src.service.reservation.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.reservation.domain.entity.booking_entity import Booking
from src.service.reservation.domain.enum.booking_status import BookingStatus
from src.service.reservation.driven_adapter.model.booking_model import BookingModel
from src.service.reservation.driven_adapter.repo.booking_command_repo_impl import to_booking


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        db_booking = await self.session.get(BookingModel, booking_id)
        return to_booking(db_booking) if db_booking else None

    @Logger.io
    async def list_by_user(
        self, *, user_id: int, offset: int, limit: int
    ) -> Tuple[List[BookingCard], int]:
        total = (
            await self.session.execute(
                select(func.count())
                .select_from(BookingModel)
                .where(BookingModel.user_id == user_id)
            )
        ).scalar_one()

        # Outer join: a removed showtime leaves its finished bookings behind
        result = await self.session.execute(
            select(BookingModel, ShowtimeModel.movie_title, ShowtimeModel.start_time)
            .outerjoin(ShowtimeModel, ShowtimeModel.id == BookingModel.showtime_id)
            .where(BookingModel.user_id == user_id)
            .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        cards = [
            BookingCard(
                booking_id=db_booking.id,
                showtime_id=db_booking.showtime_id,
                movie_title=movie_title or '',
                start_time=ensure_utc(start_time) if start_time else None,
                seat_count=db_booking.seat_count,
                total_price=db_booking.total_price,
                status=BookingStatus(db_booking.status),
            )
            for db_booking, movie_title, start_time in result.all()
        ]
        return cards, total
