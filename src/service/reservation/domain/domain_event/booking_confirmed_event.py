"""
Booking Confirmed Event

Published to the notification collaborator once a confirmation has committed.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, List
from uuid import UUID

import attrs


@attrs.define(frozen=True)
class ConfirmedSeat:
    seat_id: UUID
    seat_number: str
    seat_type: str
    price: Decimal


@attrs.define(frozen=True)
class BookingConfirmedEvent:
    booking_id: UUID
    user_id: int
    showtime_id: UUID
    movie_title: str
    cinema_name: str
    screen_name: str
    start_time: datetime
    seat_count: int
    total_price: Decimal
    confirmed_at: datetime
    seats: List[ConfirmedSeat] = attrs.field(factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {
            'bookingId': str(self.booking_id),
            'showtimeId': str(self.showtime_id),
            'movieTitle': self.movie_title,
            'cinemaName': self.cinema_name,
            'screenName': self.screen_name,
            'startTime': self.start_time.isoformat(),
            'seatCount': self.seat_count,
            'totalPrice': str(self.total_price),
            'confirmedAt': self.confirmed_at.isoformat(),
            'seats': [
                {
                    'seatId': str(seat.seat_id),
                    'seatNumber': seat.seat_number,
                    'type': seat.seat_type,
                    'price': str(seat.price),
                }
                for seat in self.seats
            ],
        }
