from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.service.reservation.domain.enum.seat_status import SeatStatus


@attrs.define(frozen=True)
class SeatSlot:
    """
    Per-showtime bookable unit, identified by (seat_id, showtime_id).

    HELD      -> booking_id and held_until set
    AVAILABLE -> booking_id and held_until empty
    BOOKED    -> booking_id set, held_until empty
    """

    id: UUID
    seat_id: UUID
    showtime_id: UUID
    price: Decimal
    status: SeatStatus = SeatStatus.AVAILABLE
    booking_id: Optional[UUID] = None
    held_until: Optional[datetime] = None

    # Layout details joined from the physical seat
    row_name: str = ''
    seat_position: int = 0
    seat_type: str = 'STANDARD'

    def __attrs_post_init__(self) -> None:
        if self.status == SeatStatus.HELD:
            valid = self.booking_id is not None and self.held_until is not None
        elif self.status == SeatStatus.AVAILABLE:
            valid = self.booking_id is None and self.held_until is None
        else:
            valid = self.booking_id is not None and self.held_until is None
        if not valid:
            raise ValueError(
                f'Inconsistent seat slot {self.id}: status={self.status} '
                f'booking_id={self.booking_id} held_until={self.held_until}'
            )

    @classmethod
    def materialize(
        cls,
        *,
        seat_id: UUID,
        showtime_id: UUID,
        price: Decimal,
        row_name: str = '',
        seat_position: int = 0,
        seat_type: str = 'STANDARD',
    ) -> 'SeatSlot':
        return cls(
            id=uuid7(),
            seat_id=seat_id,
            showtime_id=showtime_id,
            price=price,
            row_name=row_name,
            seat_position=seat_position,
            seat_type=seat_type,
        )

    @property
    def seat_number(self) -> str:
        return f'{self.row_name}{self.seat_position}'

    @property
    def is_available(self) -> bool:
        return self.status == SeatStatus.AVAILABLE

    def is_held_by(self, booking_id: UUID) -> bool:
        return self.status == SeatStatus.HELD and self.booking_id == booking_id

    def hold(self, *, booking_id: UUID, until: datetime) -> 'SeatSlot':
        return attrs.evolve(self, status=SeatStatus.HELD, booking_id=booking_id, held_until=until)

    def book(self) -> 'SeatSlot':
        return attrs.evolve(self, status=SeatStatus.BOOKED, held_until=None)

    def release(self) -> 'SeatSlot':
        return attrs.evolve(self, status=SeatStatus.AVAILABLE, booking_id=None, held_until=None)
