"""Booking projections returned by the reservation use cases"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

import attrs

from src.service.reservation.domain.entity.booking_entity import Booking
from src.service.reservation.domain.entity.seat_slot_entity import SeatSlot
from src.service.reservation.domain.enum.booking_status import BookingStatus


@attrs.define(frozen=True)
class BookingSummary:
    booking_id: UUID
    showtime_id: UUID
    seat_count: int
    total_price: Decimal
    expires_at: datetime
    status: BookingStatus

    @classmethod
    def from_booking(cls, booking: Booking) -> 'BookingSummary':
        return cls(
            booking_id=booking.id,
            showtime_id=booking.showtime_id,
            seat_count=booking.seat_count,
            total_price=booking.total_price,
            expires_at=booking.expires_at,
            status=booking.status,
        )


@attrs.define(frozen=True)
class BookedSeat:
    slot_id: UUID
    seat_id: UUID
    seat_number: str
    seat_type: str
    price: Decimal
    status: str

    @classmethod
    def from_slot(cls, slot: SeatSlot) -> 'BookedSeat':
        return cls(
            slot_id=slot.id,
            seat_id=slot.seat_id,
            seat_number=slot.seat_number,
            seat_type=slot.seat_type,
            price=slot.price,
            status=slot.status.value,
        )


@attrs.define(frozen=True)
class BookingDetail:
    booking_id: UUID
    showtime_id: UUID
    movie_title: str
    cinema_name: str
    screen_name: str
    start_time: Optional[datetime]
    seat_count: int
    total_price: Decimal
    expires_at: datetime
    status: BookingStatus
    confirmed_at: Optional[datetime]
    seats: List[BookedSeat]


@attrs.define(frozen=True)
class BookingCard:
    booking_id: UUID
    showtime_id: UUID
    movie_title: str
    start_time: Optional[datetime]
    seat_count: int
    total_price: Decimal
    status: BookingStatus


@attrs.define(frozen=True)
class BookingPage:
    items: List[BookingCard]
    page: int
    size: int
    total: int
