from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from src.service.catalog.domain.entity.screen_entity import ROW_NAMES, Screen
from src.service.catalog.domain.entity.showtime_entity import Showtime


class ScreenCreateRequest(BaseModel):
    cinema_name: str = Field(min_length=1, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    num_rows: int = Field(ge=1, le=len(ROW_NAMES))
    num_cols: int = Field(ge=1, le=100)

    class Config:
        json_schema_extra = {
            'example': {'cinema_name': 'Riverside', 'name': 'Screen 1', 'num_rows': 10, 'num_cols': 12}
        }


class ScreenResponse(BaseModel):
    id: UUID
    cinema_name: str
    name: str
    capacity: int

    @classmethod
    def from_screen(cls, screen: Screen) -> 'ScreenResponse':
        return cls(
            id=screen.id, cinema_name=screen.cinema_name, name=screen.name, capacity=screen.capacity
        )


class ShowtimeCreateRequest(BaseModel):
    movie_title: str = Field(min_length=1, max_length=255)
    screen_id: UUID
    start_time: datetime
    end_time: datetime
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)

    class Config:
        json_schema_extra = {
            'example': {
                'movie_title': 'The Long Night',
                'screen_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'start_time': '2025-01-10T19:00:00Z',
                'end_time': '2025-01-10T21:00:00Z',
                'price': '15.00',
            }
        }


class ShowtimeResponse(BaseModel):
    id: UUID
    movie_title: str
    screen_id: UUID
    cinema_name: str
    screen_name: str
    start_time: datetime
    end_time: datetime
    price: Decimal

    @classmethod
    def from_showtime(cls, showtime: Showtime) -> 'ShowtimeResponse':
        return cls(
            id=showtime.id,
            movie_title=showtime.movie_title,
            screen_id=showtime.screen_id,
            cinema_name=showtime.cinema_name,
            screen_name=showtime.screen_name,
            start_time=showtime.start_time,
            end_time=showtime.end_time,
            price=showtime.price,
        )
