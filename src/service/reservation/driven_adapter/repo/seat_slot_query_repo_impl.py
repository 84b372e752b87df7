from typing import Dict, List
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.catalog.driven_adapter.model.seat_model import SeatModel
from src.service.reservation.app.interface.i_seat_slot_query_repo import ISeatSlotQueryRepo
from src.service.reservation.domain.entity.seat_slot_entity import SeatSlot
from src.service.reservation.domain.enum.seat_status import SeatStatus
from src.service.reservation.driven_adapter.model.seat_slot_model import SeatSlotModel
from src.service.reservation.driven_adapter.repo.seat_slot_mapper import to_seat_slot


class SeatSlotQueryRepoImpl(ISeatSlotQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io(truncate_content=True)
    async def list_by_showtime(self, *, showtime_id: UUID) -> List[SeatSlot]:
        result = await self.session.execute(
            select(SeatSlotModel, SeatModel)
            .join(SeatModel, SeatModel.id == SeatSlotModel.seat_id)
            .where(SeatSlotModel.showtime_id == showtime_id)
            .order_by(SeatModel.row_name, SeatModel.seat_position)
        )
        return [to_seat_slot(db_slot, db_seat) for db_slot, db_seat in result.all()]

    @Logger.io
    async def count_by_status(self, *, showtime_id: UUID) -> Dict[SeatStatus, int]:
        result = await self.session.execute(
            select(SeatSlotModel.status, func.count())
            .where(SeatSlotModel.showtime_id == showtime_id)
            .group_by(SeatSlotModel.status)
        )
        counts = {status: 0 for status in SeatStatus}
        for status, count in result.all():
            counts[SeatStatus(status)] = count
        return counts

    @Logger.io
    async def list_by_booking(self, *, booking_id: UUID) -> List[SeatSlot]:
        result = await self.session.execute(
            select(SeatSlotModel, SeatModel)
            .join(SeatModel, SeatModel.id == SeatSlotModel.seat_id)
            .where(SeatSlotModel.booking_id == booking_id)
            .order_by(SeatModel.row_name, SeatModel.seat_position)
        )
        return [to_seat_slot(db_slot, db_seat) for db_slot, db_seat in result.all()]
