from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.catalog.driven_adapter.model.seat_model import SeatModel
from src.service.reservation.app.interface.i_seat_slot_command_repo import ISeatSlotCommandRepo
from src.service.reservation.domain.entity.seat_slot_entity import SeatSlot
from src.service.reservation.domain.enum.seat_status import SeatStatus
from src.service.reservation.driven_adapter.model.seat_slot_model import SeatSlotModel
from src.service.reservation.driven_adapter.repo.seat_slot_mapper import to_seat_slot


class SeatSlotCommandRepoImpl(ISeatSlotCommandRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @staticmethod
    def _select_locked() -> Select:
        # Lock only the seat_slot rows; the physical seat is read-only here
        return (
            select(SeatSlotModel, SeatModel)
            .join(SeatModel, SeatModel.id == SeatSlotModel.seat_id)
            .with_for_update(of=SeatSlotModel)
        )

    @Logger.io
    async def get_for_update(self, *, seat_id: UUID, showtime_id: UUID) -> Optional[SeatSlot]:
        result = await self.session.execute(
            self._select_locked().where(
                SeatSlotModel.seat_id == seat_id,
                SeatSlotModel.showtime_id == showtime_id,
            )
        )
        row = result.one_or_none()
        return to_seat_slot(*row) if row else None

    @Logger.io
    async def list_by_booking(
        self, *, booking_id: UUID, statuses: Sequence[SeatStatus]
    ) -> List[SeatSlot]:
        result = await self.session.execute(
            self._select_locked()
            .where(
                SeatSlotModel.booking_id == booking_id,
                SeatSlotModel.status.in_([status.value for status in statuses]),
            )
            .order_by(SeatModel.row_name, SeatModel.seat_position)
        )
        return [to_seat_slot(db_slot, db_seat) for db_slot, db_seat in result.all()]

    @Logger.io
    async def count_held_by_booking(self, *, booking_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(SeatSlotModel)
            .where(
                SeatSlotModel.booking_id == booking_id,
                SeatSlotModel.status == SeatStatus.HELD.value,
            )
        )
        return result.scalar_one()

    @Logger.io
    async def update(self, *, seat_slot: SeatSlot) -> SeatSlot:
        await self.session.execute(
            update(SeatSlotModel)
            .where(SeatSlotModel.id == seat_slot.id)
            .values(
                status=seat_slot.status.value,
                booking_id=seat_slot.booking_id,
                held_until=seat_slot.held_until,
            )
        )
        return seat_slot

    @Logger.io
    async def update_many(self, *, seat_slots: Sequence[SeatSlot]) -> None:
        for seat_slot in seat_slots:
            await self.update(seat_slot=seat_slot)

    @Logger.io(truncate_content=True)
    async def create_many(self, *, seat_slots: Sequence[SeatSlot]) -> int:
        self.session.add_all(
            [
                SeatSlotModel(
                    id=seat_slot.id,
                    seat_id=seat_slot.seat_id,
                    showtime_id=seat_slot.showtime_id,
                    status=seat_slot.status.value,
                    price=seat_slot.price,
                )
                for seat_slot in seat_slots
            ]
        )
        await self.session.flush()
        return len(seat_slots)

    @Logger.io
    async def exists_for_showtime(self, *, showtime_id: UUID) -> bool:
        result = await self.session.execute(
            select(SeatSlotModel.id).where(SeatSlotModel.showtime_id == showtime_id).limit(1)
        )
        return result.first() is not None

    @Logger.io
    async def delete_by_showtime(self, *, showtime_id: UUID) -> int:
        result = await self.session.execute(
            delete(SeatSlotModel).where(SeatSlotModel.showtime_id == showtime_id)
        )
        return result.rowcount or 0  # type: ignore[attr-defined]
