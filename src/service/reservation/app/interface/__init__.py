"""Application layer interfaces (Ports)"""

from src.service.reservation.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.reservation.app.interface.i_booking_notifier import IBookingNotifier
from src.service.reservation.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.reservation.app.interface.i_seat_slot_command_repo import (
    ISeatSlotCommandRepo,
)
from src.service.reservation.app.interface.i_seat_slot_query_repo import ISeatSlotQueryRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingNotifier',
    'IBookingQueryRepo',
    'ISeatSlotCommandRepo',
    'ISeatSlotQueryRepo',
]
