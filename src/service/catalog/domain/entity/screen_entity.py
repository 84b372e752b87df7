from datetime import datetime
import string
from typing import List, Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.exception.exceptions import DomainError
from src.service.catalog.domain.enum.seat_type import SeatType


ROW_NAMES = string.ascii_uppercase


@attrs.define(frozen=True)
class ScreenSeat:
    """Physical seat of a screen; seat slots are materialized from these per showtime"""

    id: UUID
    screen_id: UUID
    row_name: str
    seat_position: int
    seat_type: SeatType = SeatType.STANDARD
    is_active: bool = True

    @property
    def seat_number(self) -> str:
        return f'{self.row_name}{self.seat_position}'


@attrs.define
class Screen:
    id: UUID
    cinema_name: str
    name: str
    capacity: int
    created_at: Optional[datetime] = None

    @classmethod
    def create(cls, *, cinema_name: str, name: str, num_rows: int, num_cols: int) -> 'Screen':
        if not cinema_name.strip() or not name.strip():
            raise DomainError('Cinema name and screen name are required')
        if not 1 <= num_rows <= len(ROW_NAMES):
            raise DomainError(f'Number of rows must be between 1 and {len(ROW_NAMES)}')
        if num_cols < 1:
            raise DomainError('Number of columns must be positive')
        return cls(
            id=uuid7(),
            cinema_name=cinema_name.strip(),
            name=name.strip(),
            capacity=num_rows * num_cols,
        )

    def build_seat_grid(self, *, num_rows: int, num_cols: int) -> List[ScreenSeat]:
        """A1..A{cols}, B1.. in row-major order"""
        return [
            ScreenSeat(
                id=uuid7(),
                screen_id=self.id,
                row_name=ROW_NAMES[row],
                seat_position=col,
            )
            for row in range(num_rows)
            for col in range(1, num_cols + 1)
        ]
