"""
Seat Layout Query Use Case
Every seat slot of a showtime, whatever its status, for layout rendering
"""

from typing import Callable, List, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.dto.seat_dto import SeatLayoutItem


class ListShowtimeSeatsUseCase:
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

    @Logger.io(truncate_content=True)
    async def list_seats(self, *, showtime_id: UUID) -> List[SeatLayoutItem]:
        async with self.uow_factory() as uow:
            showtime = await uow.catalog_query_repo.get_showtime(showtime_id=showtime_id)
            if not showtime:
                raise NotFoundError('Showtime not found')
            seat_slots = await uow.seat_slot_query_repo.list_by_showtime(showtime_id=showtime_id)

        return [SeatLayoutItem.from_slot(seat_slot) for seat_slot in seat_slots]
