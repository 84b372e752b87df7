from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional
from uuid import UUID

import attrs
from uuid_utils.compat import uuid7

from src.platform.logging.loguru_io import Logger
from src.service.reservation.domain.enum.booking_status import BookingStatus
from src.service.reservation.domain.reservation_errors import (
    BookingExpiredError,
    InvalidBookingStateError,
)


ZERO = Decimal('0.00')


def to_money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(Decimal('0.01'))


@attrs.define
class Booking:
    """
    Cart-like aggregate of seats held by one user for one showtime.

    seat_count / total_price mirror the seat slots currently HELD or BOOKED under this
    booking. expires_at is fixed at creation and never extended by holds.
    """

    id: UUID
    user_id: int
    showtime_id: UUID
    expires_at: datetime
    status: BookingStatus = BookingStatus.PENDING
    seat_count: int = 0
    total_price: Decimal = ZERO
    confirmed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls, *, user_id: int, showtime_id: UUID, now: datetime, hold_window: timedelta
    ) -> 'Booking':
        return cls(
            id=uuid7(),
            user_id=user_id,
            showtime_id=showtime_id,
            expires_at=now + hold_window,
            created_at=now,
            updated_at=now,
        )

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    def is_expired(self, *, now: datetime) -> bool:
        return self.expires_at <= now

    def is_lapsed_pending(self, *, now: datetime) -> bool:
        """PENDING and past its hold window: must be reclaimed before anything else"""
        return self.status == BookingStatus.PENDING and self.is_expired(now=now)

    def ensure_pending(self) -> None:
        if self.status == BookingStatus.EXPIRED:
            raise BookingExpiredError()
        if self.status != BookingStatus.PENDING:
            raise InvalidBookingStateError(f'Booking is {self.status.value.lower()}')

    def add_seat(self, *, price: Decimal, now: datetime) -> 'Booking':
        return attrs.evolve(
            self,
            seat_count=self.seat_count + 1,
            total_price=to_money(self.total_price + price),
            updated_at=now,
        )

    def remove_seat(self, *, price: Decimal, now: datetime) -> 'Booking':
        if self.seat_count < 1:
            raise InvalidBookingStateError('Booking has no seats to release')
        return attrs.evolve(
            self,
            seat_count=self.seat_count - 1,
            total_price=to_money(self.total_price - price),
            updated_at=now,
        )

    @Logger.io
    def confirm(self, *, now: datetime) -> 'Booking':
        return attrs.evolve(self, status=BookingStatus.CONFIRMED, confirmed_at=now, updated_at=now)

    @Logger.io
    def cancel(self, *, now: datetime) -> 'Booking':
        return attrs.evolve(
            self, status=BookingStatus.CANCELLED, seat_count=0, total_price=ZERO, updated_at=now
        )

    @Logger.io
    def expire(self, *, now: datetime) -> 'Booking':
        return attrs.evolve(
            self, status=BookingStatus.EXPIRED, seat_count=0, total_price=ZERO, updated_at=now
        )
