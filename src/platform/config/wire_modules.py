"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.catalog.app.command import (
    register_screen_use_case,
    remove_showtime_use_case,
    schedule_showtime_use_case,
)
from src.service.reservation.app.command import (
    cancel_booking_use_case,
    confirm_booking_use_case,
    create_booking_use_case,
    hold_seat_use_case,
    release_seat_use_case,
    sweep_expired_bookings_use_case,
)
from src.service.reservation.app.query import (
    get_availability_stats_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    list_showtime_seats_use_case,
)
from src.service.reservation.driving_adapter.http_controller.auth import current_user


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    hold_seat_use_case,
    release_seat_use_case,
    confirm_booking_use_case,
    cancel_booking_use_case,
    sweep_expired_bookings_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    list_showtime_seats_use_case,
    get_availability_stats_use_case,
    register_screen_use_case,
    schedule_showtime_use_case,
    remove_showtime_use_case,
    current_user,
]
