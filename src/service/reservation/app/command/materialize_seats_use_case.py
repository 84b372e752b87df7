from decimal import Decimal
from typing import Callable, List
from uuid import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.catalog.domain.entity.screen_entity import ScreenSeat
from src.service.reservation.domain.entity.seat_slot_entity import SeatSlot
from src.service.reservation.domain.reservation_errors import InventoryAlreadyMaterializedError


class MaterializeSeatsUseCase:
    """
    Create the per-showtime seat inventory: one AVAILABLE slot per active seat of the
    screen, all at the showtime's price. Allowed once per showtime.
    """

    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

    @Logger.io
    async def materialize(self, *, showtime_id: UUID) -> int:
        async with self.uow_factory() as uow:
            showtime = await uow.catalog_query_repo.get_showtime(showtime_id=showtime_id)
            if not showtime:
                raise NotFoundError('Showtime not found')

            seat_layout = await uow.catalog_query_repo.get_seats_for_screen(
                screen_id=showtime.screen_id
            )
            created = await self.materialize_in(
                uow, showtime_id=showtime_id, seat_layout=seat_layout, price=showtime.price
            )
            await uow.commit()
        return created

    @staticmethod
    @Logger.io(truncate_content=True)
    async def materialize_in(
        uow: AbstractUnitOfWork,
        *,
        showtime_id: UUID,
        seat_layout: List[ScreenSeat],
        price: Decimal,
    ) -> int:
        """Materialize inside a unit of work the caller owns and commits"""
        if not seat_layout:
            raise NotFoundError('No seats found for screen')
        if await uow.seat_slot_command_repo.exists_for_showtime(showtime_id=showtime_id):
            raise InventoryAlreadyMaterializedError()

        seat_slots = [
            SeatSlot.materialize(
                seat_id=seat.id,
                showtime_id=showtime_id,
                price=price,
                row_name=seat.row_name,
                seat_position=seat.seat_position,
                seat_type=seat.seat_type.value,
            )
            for seat in seat_layout
            if seat.is_active
        ]
        created = await uow.seat_slot_command_repo.create_many(seat_slots=seat_slots)
        Logger.base.info(f'💺 [INVENTORY] Materialized {created} seat slot(s) for {showtime_id}')
        return created
