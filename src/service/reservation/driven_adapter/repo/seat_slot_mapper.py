from src.platform.clock import ensure_utc
from src.service.catalog.driven_adapter.model.seat_model import SeatModel
from src.service.reservation.domain.entity.seat_slot_entity import SeatSlot
from src.service.reservation.domain.enum.seat_status import SeatStatus
from src.service.reservation.driven_adapter.model.seat_slot_model import SeatSlotModel


def to_seat_slot(db_slot: SeatSlotModel, db_seat: SeatModel) -> SeatSlot:
    return SeatSlot(
        id=db_slot.id,
        seat_id=db_slot.seat_id,
        showtime_id=db_slot.showtime_id,
        price=db_slot.price,
        status=SeatStatus(db_slot.status),
        booking_id=db_slot.booking_id,
        held_until=ensure_utc(db_slot.held_until) if db_slot.held_until else None,
        row_name=db_seat.row_name,
        seat_position=db_seat.seat_position,
        seat_type=db_seat.seat_type,
    )
