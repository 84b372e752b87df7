"""
Seat Availability Query Use Case
Snapshot counts per status; not serialized with concurrent holds
"""

from typing import Callable, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.dto.seat_dto import AvailabilityStats
from src.service.reservation.domain.enum.seat_status import SeatStatus


class GetAvailabilityStatsUseCase:
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
    async def get_stats(self, *, showtime_id: UUID) -> AvailabilityStats:
        """
        Args:
            showtime_id: Showtime ID

        Returns:
            AvailabilityStats with total = available + held + booked
        """
        async with self.uow_factory() as uow:
            showtime = await uow.catalog_query_repo.get_showtime(showtime_id=showtime_id)
            if not showtime:
                raise NotFoundError('Showtime not found')
            counts = await uow.seat_slot_query_repo.count_by_status(showtime_id=showtime_id)

        stats = AvailabilityStats(
            showtime_id=showtime_id,
            total=sum(counts.values()),
            available=counts.get(SeatStatus.AVAILABLE, 0),
            held=counts.get(SeatStatus.HELD, 0),
            booked=counts.get(SeatStatus.BOOKED, 0),
        )
        Logger.base.info(
            f'📊 [STATS] Showtime {showtime_id}: {stats.available}/{stats.total} available'
        )
        return stats
