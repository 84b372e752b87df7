from abc import ABC, abstractmethod
from typing import Dict, List
from uuid import UUID

from src.service.reservation.domain.entity.seat_slot_entity import SeatSlot
from src.service.reservation.domain.enum.seat_status import SeatStatus


class ISeatSlotQueryRepo(ABC):
    """Snapshot reads; not serialized with the hold engine"""

    @abstractmethod
    async def list_by_showtime(self, *, showtime_id: UUID) -> List[SeatSlot]:
        """All slots regardless of status, ordered by row then position"""
        pass

    @abstractmethod
    async def count_by_status(self, *, showtime_id: UUID) -> Dict[SeatStatus, int]:
        pass

    @abstractmethod
    async def list_by_booking(self, *, booking_id: UUID) -> List[SeatSlot]:
        pass
