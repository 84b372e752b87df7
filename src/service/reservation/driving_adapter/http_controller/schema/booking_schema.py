from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.service.reservation.app.dto.booking_dto import (
    BookingCard,
    BookingDetail,
    BookingPage,
    BookingSummary,
)
from src.service.reservation.domain.domain_event.booking_confirmed_event import (
    BookingConfirmedEvent,
)


class SeatActionRequest(BaseModel):
    seat_id: UUID
    showtime_id: UUID

    class Config:
        json_schema_extra = {
            'example': {
                'seat_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'showtime_id': '01936d8f-4b21-7a10-8c3d-abcdef012345',
            }
        }


class BookingSummaryResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'booking_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'showtime_id': '01936d8f-4b21-7a10-8c3d-abcdef012345',
                'seat_count': 2,
                'total_price': '27.50',
                'expires_at': '2025-01-10T10:45:00Z',
                'status': 'PENDING',
            }
        },
    }

    booking_id: UUID
    showtime_id: UUID
    seat_count: int
    total_price: Decimal
    expires_at: datetime
    status: str

    @classmethod
    def from_summary(cls, summary: BookingSummary) -> 'BookingSummaryResponse':
        return cls(
            booking_id=summary.booking_id,
            showtime_id=summary.showtime_id,
            seat_count=summary.seat_count,
            total_price=summary.total_price,
            expires_at=summary.expires_at,
            status=summary.status.value,
        )


class ConfirmedSeatResponse(BaseModel):
    seat_id: UUID
    seat_number: str
    seat_type: str
    price: Decimal


class BookingConfirmationResponse(BaseModel):
    booking_id: UUID
    showtime_id: UUID
    movie_title: str
    cinema_name: str
    screen_name: str
    start_time: datetime
    seat_count: int
    total_price: Decimal
    confirmed_at: datetime
    status: str = 'CONFIRMED'
    seats: List[ConfirmedSeatResponse]

    @classmethod
    def from_event(cls, event: BookingConfirmedEvent) -> 'BookingConfirmationResponse':
        return cls(
            booking_id=event.booking_id,
            showtime_id=event.showtime_id,
            movie_title=event.movie_title,
            cinema_name=event.cinema_name,
            screen_name=event.screen_name,
            start_time=event.start_time,
            seat_count=event.seat_count,
            total_price=event.total_price,
            confirmed_at=event.confirmed_at,
            seats=[
                ConfirmedSeatResponse(
                    seat_id=seat.seat_id,
                    seat_number=seat.seat_number,
                    seat_type=seat.seat_type,
                    price=seat.price,
                )
                for seat in event.seats
            ],
        )


class BookedSeatResponse(BaseModel):
    slot_id: UUID
    seat_id: UUID
    seat_number: str
    seat_type: str
    price: Decimal
    status: str


class BookingDetailResponse(BaseModel):
    booking_id: UUID
    showtime_id: UUID
    movie_title: str
    cinema_name: str
    screen_name: str
    start_time: Optional[datetime] = None
    seat_count: int
    total_price: Decimal
    expires_at: datetime
    status: str
    confirmed_at: Optional[datetime] = None
    seats: List[BookedSeatResponse]

    @classmethod
    def from_detail(cls, detail: BookingDetail) -> 'BookingDetailResponse':
        return cls(
            booking_id=detail.booking_id,
            showtime_id=detail.showtime_id,
            movie_title=detail.movie_title,
            cinema_name=detail.cinema_name,
            screen_name=detail.screen_name,
            start_time=detail.start_time,
            seat_count=detail.seat_count,
            total_price=detail.total_price,
            expires_at=detail.expires_at,
            status=detail.status.value,
            confirmed_at=detail.confirmed_at,
            seats=[
                BookedSeatResponse(
                    slot_id=seat.slot_id,
                    seat_id=seat.seat_id,
                    seat_number=seat.seat_number,
                    seat_type=seat.seat_type,
                    price=seat.price,
                    status=seat.status,
                )
                for seat in detail.seats
            ],
        )


class BookingCardResponse(BaseModel):
    booking_id: UUID
    showtime_id: UUID
    movie_title: str
    start_time: Optional[datetime] = None
    seat_count: int
    total_price: Decimal
    status: str

    @classmethod
    def from_card(cls, card: BookingCard) -> 'BookingCardResponse':
        return cls(
            booking_id=card.booking_id,
            showtime_id=card.showtime_id,
            movie_title=card.movie_title,
            start_time=card.start_time,
            seat_count=card.seat_count,
            total_price=card.total_price,
            status=card.status.value,
        )


class BookingPageResponse(BaseModel):
    items: List[BookingCardResponse]
    page: int
    size: int
    total: int

    @classmethod
    def from_page(cls, booking_page: BookingPage) -> 'BookingPageResponse':
        return cls(
            items=[BookingCardResponse.from_card(card) for card in booking_page.items],
            page=booking_page.page,
            size=booking_page.size,
            total=booking_page.total,
        )
