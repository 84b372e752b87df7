from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.service.reservation.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID, for_update: bool = False) -> Optional[Booking]:
        """
        Get booking by ID

        Args:
            booking_id: Booking ID
            for_update: Lock the row until the unit of work ends

        Returns:
            Booking entity or None if not found
        """
        pass

    @abstractmethod
    async def update(self, *, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def list_lapsed_pending_ids(self, *, now: datetime) -> List[UUID]:
        """IDs of PENDING bookings with expires_at < now"""
        pass

    @abstractmethod
    async def count_active_for_showtime(self, *, showtime_id: UUID) -> int:
        """Number of PENDING or CONFIRMED bookings on the showtime"""
        pass
