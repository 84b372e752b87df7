from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.service.catalog.domain.entity.screen_entity import Screen, ScreenSeat
from src.service.catalog.domain.entity.showtime_entity import Showtime


class ICatalogCommandRepo(ABC):
    @abstractmethod
    async def create_screen(self, *, screen: Screen, seats: List[ScreenSeat]) -> Screen:
        pass

    @abstractmethod
    async def create_showtime(self, *, showtime: Showtime) -> Showtime:
        pass

    @abstractmethod
    async def delete_showtime(self, *, showtime_id: UUID) -> None:
        pass
