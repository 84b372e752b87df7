from decimal import Decimal
from uuid import UUID

import attrs

from src.service.reservation.domain.entity.seat_slot_entity import SeatSlot


@attrs.define(frozen=True)
class SeatLayoutItem:
    slot_id: UUID
    seat_id: UUID
    row_name: str
    seat_position: int
    seat_number: str
    seat_type: str
    price: Decimal
    status: str

    @classmethod
    def from_slot(cls, slot: SeatSlot) -> 'SeatLayoutItem':
        return cls(
            slot_id=slot.id,
            seat_id=slot.seat_id,
            row_name=slot.row_name,
            seat_position=slot.seat_position,
            seat_number=slot.seat_number,
            seat_type=slot.seat_type,
            price=slot.price,
            status=slot.status.value,
        )


@attrs.define(frozen=True)
class AvailabilityStats:
    showtime_id: UUID
    total: int
    available: int
    held: int
    booked: int
