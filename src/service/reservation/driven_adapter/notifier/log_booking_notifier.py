"""Booking confirmation notifier that writes to the log instead of sending email."""

import orjson

from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.interface.i_booking_notifier import IBookingNotifier
from src.service.reservation.domain.domain_event.booking_confirmed_event import (
    BookingConfirmedEvent,
)


class LogBookingNotifier(IBookingNotifier):
    @staticmethod
    def render_text(event: BookingConfirmedEvent) -> str:
        lines = [
            'BOOKING CONFIRMATION',
            f'Booking ID: {event.booking_id}',
            f'Movie: {event.movie_title}',
            f'Cinema: {event.cinema_name} / Screen: {event.screen_name}',
            f'Start Time: {event.start_time:%Y-%m-%d %H:%M} UTC',
            f'Number of Seats: {event.seat_count}',
            f'Total Price: ${event.total_price}',
        ]
        lines.extend(
            f'Seat: {seat.seat_number} - Type: {seat.seat_type} - Price: ${seat.price}'
            for seat in event.seats
        )
        return '\n'.join(lines)

    @staticmethod
    def render_payload(event: BookingConfirmedEvent) -> bytes:
        return orjson.dumps(event.to_payload())

    @Logger.io
    async def send_booking_confirmation(self, *, event: BookingConfirmedEvent) -> None:
        payload = self.render_payload(event)
        Logger.base.info(
            f'📧 [NOTIFY] Booking {event.booking_id} confirmed for user {event.user_id}\n'
            f'{self.render_text(event)}'
        )
        Logger.base.debug(f'📧 [NOTIFY] payload={payload.decode()}')
