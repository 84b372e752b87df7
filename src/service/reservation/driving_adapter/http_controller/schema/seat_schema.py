from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel

from src.service.reservation.app.dto.seat_dto import AvailabilityStats, SeatLayoutItem


class SeatLayoutResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'slot_id': '01936d8f-6a10-7b2c-9d4e-00000000a001',
                'seat_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'row_name': 'A',
                'seat_position': 1,
                'seat_number': 'A1',
                'type': 'STANDARD',
                'price': '15.00',
                'status': 'AVAILABLE',
            }
        },
    }

    slot_id: UUID
    seat_id: UUID
    row_name: str
    seat_position: int
    seat_number: str
    type: str
    price: Decimal
    status: str

    @classmethod
    def from_item(cls, item: SeatLayoutItem) -> 'SeatLayoutResponse':
        return cls(
            slot_id=item.slot_id,
            seat_id=item.seat_id,
            row_name=item.row_name,
            seat_position=item.seat_position,
            seat_number=item.seat_number,
            type=item.seat_type,
            price=item.price,
            status=item.status,
        )


class AvailabilityStatsResponse(BaseModel):
    showtime_id: UUID
    total: int
    available: int
    held: int
    booked: int

    @classmethod
    def from_stats(cls, stats: AvailabilityStats) -> 'AvailabilityStatsResponse':
        return cls(
            showtime_id=stats.showtime_id,
            total=stats.total,
            available=stats.available,
            held=stats.held,
            booked=stats.booked,
        )
