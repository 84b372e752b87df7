"""Application layer DTOs"""

from src.service.reservation.app.dto.booking_dto import (
    BookedSeat,
    BookingCard,
    BookingDetail,
    BookingPage,
    BookingSummary,
)
from src.service.reservation.app.dto.seat_dto import AvailabilityStats, SeatLayoutItem

__all__ = [
    'AvailabilityStats',
    'BookedSeat',
    'BookingCard',
    'BookingDetail',
    'BookingPage',
    'BookingSummary',
    'SeatLayoutItem',
]
