from typing import Callable
from uuid import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger


class ReleaseShowtimeSeatsUseCase:
    """Drop the whole seat inventory of a showtime that is being removed"""

    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def release(self, *, showtime_id: UUID) -> int:
        async with self.uow_factory() as uow:
            deleted = await self.release_in(uow, showtime_id=showtime_id)
            await uow.commit()
        return deleted

    @staticmethod
    @Logger.io
    async def release_in(uow: AbstractUnitOfWork, *, showtime_id: UUID) -> int:
        deleted = await uow.seat_slot_command_repo.delete_by_showtime(showtime_id=showtime_id)
        Logger.base.info(f'💺 [INVENTORY] Released {deleted} seat slot(s) of {showtime_id}')
        return deleted
