from src.service.reservation.driven_adapter.model.booking_model import BookingModel
from src.service.reservation.driven_adapter.model.seat_slot_model import SeatSlotModel

__all__ = ['BookingModel', 'SeatSlotModel']
