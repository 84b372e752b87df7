from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.service.reservation.app.dto.booking_dto import BookingCard
from src.service.reservation.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def list_by_user(
        self, *, user_id: int, offset: int, limit: int
    ) -> Tuple[List[BookingCard], int]:
        """
        Page of the user's bookings, newest first

        Returns:
            (cards on this page, total number of bookings of the user)
        """
        pass
