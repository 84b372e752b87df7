from datetime import datetime
from decimal import Decimal
from typing import Callable, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.domain.entity.showtime_entity import Showtime, ShowtimeConflictError
from src.service.reservation.app.command.materialize_seats_use_case import (
    MaterializeSeatsUseCase,
)


class ScheduleShowtimeUseCase:
    """
    Put a movie on a screen and open its seat inventory.

    The screen row is locked for the check, so two schedules on one screen cannot
    both pass the overlap test. Showtime and seat slots commit together.
    """

    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def schedule_showtime(
        self,
        *,
        movie_title: str,
        screen_id: UUID,
        start_time: datetime,
        end_time: datetime,
        price: Decimal,
    ) -> Showtime:
        showtime = Showtime.create(
            movie_title=movie_title,
            screen_id=screen_id,
            start_time=start_time,
            end_time=end_time,
            price=price,
        )

        async with self.uow_factory() as uow:
            screen = await uow.catalog_query_repo.get_screen(screen_id=screen_id, for_update=True)
            if not screen:
                raise NotFoundError('Screen not found')

            candidates = await uow.catalog_query_repo.list_showtimes_for_screen_between(
                screen_id=screen_id, start_time=showtime.start_time, end_time=showtime.end_time
            )
            for existing in candidates:
                if existing.overlaps(start_time=showtime.start_time, end_time=showtime.end_time):
                    raise ShowtimeConflictError(
                        f'Showtime conflicts with {existing.movie_title} '
                        f'({existing.start_time.isoformat()} - {existing.end_time.isoformat()})'
                    )

            await uow.catalog_command_repo.create_showtime(showtime=showtime)
            seat_layout = await uow.catalog_query_repo.get_seats_for_screen(screen_id=screen_id)
            await MaterializeSeatsUseCase.materialize_in(
                uow, showtime_id=showtime.id, seat_layout=seat_layout, price=showtime.price
            )
            await uow.commit()

        showtime.cinema_name = screen.cinema_name
        showtime.screen_name = screen.name
        Logger.base.info(
            f'🎬 [SHOWTIME] Scheduled {showtime.movie_title} on {screen.name} '
            f'at {showtime.start_time.isoformat()}'
        )
        return showtime
