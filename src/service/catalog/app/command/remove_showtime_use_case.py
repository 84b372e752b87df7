from typing import Callable, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ConflictError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.command.release_showtime_seats_use_case import (
    ReleaseShowtimeSeatsUseCase,
)


class RemoveShowtimeUseCase:
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
    async def remove_showtime(self, *, showtime_id: UUID) -> None:
        async with self.uow_factory() as uow:
            showtime = await uow.catalog_query_repo.get_showtime(showtime_id=showtime_id)
            if not showtime:
                raise NotFoundError('Showtime not found')

            active = await uow.booking_command_repo.count_active_for_showtime(
                showtime_id=showtime_id
            )
            if active:
                raise ConflictError(f'Showtime still has {active} active booking(s)')

            await ReleaseShowtimeSeatsUseCase.release_in(uow, showtime_id=showtime_id)
            await uow.catalog_command_repo.delete_showtime(showtime_id=showtime_id)
            await uow.commit()

        Logger.base.info(f'🎬 [SHOWTIME] Removed {showtime.movie_title} ({showtime_id})')
