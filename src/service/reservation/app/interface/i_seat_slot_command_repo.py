from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from src.service.reservation.domain.entity.seat_slot_entity import SeatSlot
from src.service.reservation.domain.enum.seat_status import SeatStatus


class ISeatSlotCommandRepo(ABC):
    """
    Seat slot writes inside a unit of work.

    Reads here are for check-and-mutate and lock the rows they return where the
    store supports row locks.
    """

    @abstractmethod
    async def get_for_update(self, *, seat_id: UUID, showtime_id: UUID) -> Optional[SeatSlot]:
        pass

    @abstractmethod
    async def list_by_booking(
        self, *, booking_id: UUID, statuses: Sequence[SeatStatus]
    ) -> List[SeatSlot]:
        """Slots owned by the booking in one of the given statuses, locked for update"""
        pass

    @abstractmethod
    async def count_held_by_booking(self, *, booking_id: UUID) -> int:
        pass

    @abstractmethod
    async def update(self, *, seat_slot: SeatSlot) -> SeatSlot:
        """Persist status, booking_id and held_until of the slot"""
        pass

    @abstractmethod
    async def update_many(self, *, seat_slots: Sequence[SeatSlot]) -> None:
        pass

    @abstractmethod
    async def create_many(self, *, seat_slots: Sequence[SeatSlot]) -> int:
        pass

    @abstractmethod
    async def exists_for_showtime(self, *, showtime_id: UUID) -> bool:
        pass

    @abstractmethod
    async def delete_by_showtime(self, *, showtime_id: UUID) -> int:
        pass
