from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.clock import ensure_utc
from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_query_repo import ICatalogQueryRepo
from src.service.catalog.domain.entity.screen_entity import Screen, ScreenSeat
from src.service.catalog.domain.entity.showtime_entity import Showtime
from src.service.catalog.domain.enum.seat_type import SeatType
from src.service.catalog.driven_adapter.model.screen_model import ScreenModel
from src.service.catalog.driven_adapter.model.seat_model import SeatModel
from src.service.catalog.driven_adapter.model.showtime_model import ShowtimeModel


class CatalogQueryRepoImpl(ICatalogQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_showtime(db_showtime: ShowtimeModel) -> Showtime:
        return Showtime(
            id=db_showtime.id,
            movie_title=db_showtime.movie_title,
            screen_id=db_showtime.screen_id,
            start_time=ensure_utc(db_showtime.start_time),
            end_time=ensure_utc(db_showtime.end_time),
            price=db_showtime.price,
            cinema_name=db_showtime.screen.cinema_name,
            screen_name=db_showtime.screen.name,
            created_at=db_showtime.created_at,
        )

    @staticmethod
    def _to_seat(db_seat: SeatModel) -> ScreenSeat:
        return ScreenSeat(
            id=db_seat.id,
            screen_id=db_seat.screen_id,
            row_name=db_seat.row_name,
            seat_position=db_seat.seat_position,
            seat_type=SeatType(db_seat.seat_type),
            is_active=db_seat.is_active,
        )

    @Logger.io
    async def get_showtime(self, *, showtime_id: UUID) -> Optional[Showtime]:
        result = await self.session.execute(
            select(ShowtimeModel).where(ShowtimeModel.id == showtime_id)
        )
        db_showtime = result.scalar_one_or_none()
        return self._to_showtime(db_showtime) if db_showtime else None

    @Logger.io
    async def get_screen(self, *, screen_id: UUID, for_update: bool = False) -> Optional[Screen]:
        db_screen = await self.session.get(ScreenModel, screen_id, with_for_update=for_update)
        if not db_screen:
            return None
        return Screen(
            id=db_screen.id,
            cinema_name=db_screen.cinema_name,
            name=db_screen.name,
            capacity=db_screen.capacity,
            created_at=db_screen.created_at,
        )

    @Logger.io
    async def get_seats_for_screen(self, *, screen_id: UUID) -> List[ScreenSeat]:
        result = await self.session.execute(
            select(SeatModel)
            .where(SeatModel.screen_id == screen_id)
            .order_by(SeatModel.row_name, SeatModel.seat_position)
        )
        return [self._to_seat(db_seat) for db_seat in result.scalars().all()]

    @Logger.io
    async def list_showtimes_for_screen_between(
        self, *, screen_id: UUID, start_time: datetime, end_time: datetime
    ) -> List[Showtime]:
        # Inclusive window; the exact overlap rule is applied by Showtime.overlaps
        result = await self.session.execute(
            select(ShowtimeModel).where(
                ShowtimeModel.screen_id == screen_id,
                ShowtimeModel.start_time <= end_time,
                ShowtimeModel.end_time >= start_time,
            )
        )
        return [self._to_showtime(db_showtime) for db_showtime in result.scalars().all()]

    @Logger.io
    async def screen_name_exists(self, *, cinema_name: str, name: str) -> bool:
        result = await self.session.execute(
            select(func.count())
            .select_from(ScreenModel)
            .where(
                func.lower(ScreenModel.cinema_name) == cinema_name.lower(),
                func.lower(ScreenModel.name) == name.lower(),
            )
        )
        return result.scalar_one() > 0
