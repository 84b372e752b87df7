"""
Reclamation of a lapsed booking inside an open unit of work.

Shared by the expiry sweeper and every command that discovers a PENDING booking past
its hold window: held seats go back to AVAILABLE and the booking becomes EXPIRED.
The caller commits.
"""

from datetime import datetime

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.service.reservation.domain.entity.booking_entity import Booking
from src.service.reservation.domain.enum.seat_status import SeatStatus


@Logger.io
async def reclaim_lapsed_booking(
    uow: AbstractUnitOfWork, *, booking: Booking, now: datetime
) -> Booking:
    held_slots = await uow.seat_slot_command_repo.list_by_booking(
        booking_id=booking.id, statuses=[SeatStatus.HELD]
    )
    await uow.seat_slot_command_repo.update_many(
        seat_slots=[seat_slot.release() for seat_slot in held_slots]
    )
    expired = booking.expire(now=now)
    await uow.booking_command_repo.update(booking=expired)

    metrics.record_booking_transition(status='expired')
    Logger.base.info(
        f'⌛ [EXPIRY] Booking {booking.id} expired, released {len(held_slots)} held seat(s)'
    )
    return expired
