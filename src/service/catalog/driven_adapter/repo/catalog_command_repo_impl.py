from typing import List
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.catalog.app.interface.i_catalog_command_repo import ICatalogCommandRepo
from src.service.catalog.domain.entity.screen_entity import Screen, ScreenSeat
from src.service.catalog.domain.entity.showtime_entity import Showtime
from src.service.catalog.driven_adapter.model.screen_model import ScreenModel
from src.service.catalog.driven_adapter.model.seat_model import SeatModel
from src.service.catalog.driven_adapter.model.showtime_model import ShowtimeModel


class CatalogCommandRepoImpl(ICatalogCommandRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def create_screen(self, *, screen: Screen, seats: List[ScreenSeat]) -> Screen:
        self.session.add(
            ScreenModel(
                id=screen.id,
                cinema_name=screen.cinema_name,
                name=screen.name,
                capacity=screen.capacity,
            )
        )
        # Parent row must exist before the seat FKs are checked
        await self.session.flush()
        self.session.add_all(
            [
                SeatModel(
                    id=seat.id,
                    screen_id=seat.screen_id,
                    row_name=seat.row_name,
                    seat_position=seat.seat_position,
                    seat_type=seat.seat_type.value,
                    is_active=seat.is_active,
                )
                for seat in seats
            ]
        )
        await self.session.flush()
        return screen

    @Logger.io
    async def create_showtime(self, *, showtime: Showtime) -> Showtime:
        self.session.add(
            ShowtimeModel(
                id=showtime.id,
                movie_title=showtime.movie_title,
                screen_id=showtime.screen_id,
                start_time=showtime.start_time,
                end_time=showtime.end_time,
                price=showtime.price,
            )
        )
        await self.session.flush()
        return showtime

    @Logger.io
    async def delete_showtime(self, *, showtime_id: UUID) -> None:
        await self.session.execute(delete(ShowtimeModel).where(ShowtimeModel.id == showtime_id))
