from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.service.catalog.domain.entity.screen_entity import Screen, ScreenSeat
from src.service.catalog.domain.entity.showtime_entity import Showtime


class ICatalogQueryRepo(ABC):
    """
    Read-only lookups into the catalog collaborator.

    The reservation core only needs a showtime (with its screen, cinema and movie)
    and the seat layout of a screen.
    """

    @abstractmethod
    async def get_showtime(self, *, showtime_id: UUID) -> Optional[Showtime]:
        pass

    @abstractmethod
    async def get_screen(self, *, screen_id: UUID, for_update: bool = False) -> Optional[Screen]:
        """
        Get screen by ID

        Args:
            screen_id: Screen ID
            for_update: Lock the screen row so schedule checks on it are serialized
        """
        pass

    @abstractmethod
    async def get_seats_for_screen(self, *, screen_id: UUID) -> List[ScreenSeat]:
        """All seats of the screen, active or not, ordered by row then position"""
        pass

    @abstractmethod
    async def list_showtimes_for_screen_between(
        self, *, screen_id: UUID, start_time: datetime, end_time: datetime
    ) -> List[Showtime]:
        """Showtimes on the screen whose interval may intersect [start_time, end_time]"""
        pass

    @abstractmethod
    async def screen_name_exists(self, *, cinema_name: str, name: str) -> bool:
        pass
