import time
from typing import Callable, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.clock import Clock
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.state.seat_lock import SeatLockManager
from src.service.reservation.app.command.booking_expiry import reclaim_lapsed_booking
from src.service.reservation.app.dto.booking_dto import BookingSummary
from src.service.reservation.domain.reservation_errors import (
    BookingExpiredError,
    SeatNotHeldByBookingError,
)


class ReleaseSeatUseCase:
    """
    Give a held seat back to the showtime.

    The authoritative check is seat ownership by the booking; the caller's identity
    is vetted at the HTTP boundary.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        seat_lock_manager: SeatLockManager,
        clock: Clock,
    ) -> None:
        self.uow_factory = uow_factory
        self.seat_lock_manager = seat_lock_manager
        self.clock = clock
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        seat_lock_manager: SeatLockManager = Depends(Provide[Container.seat_lock_manager]),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(uow_factory=uow_factory, seat_lock_manager=seat_lock_manager, clock=clock)

    @Logger.io
    async def release_seat(
        self, *, booking_id: UUID, seat_id: UUID, showtime_id: UUID, user_id: int
    ) -> BookingSummary:
        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.release_seat',
            attributes={
                'booking.id': str(booking_id),
                'seat.id': str(seat_id),
                'showtime.id': str(showtime_id),
                'user.id': user_id,
            },
        ):
            try:
                summary = await self._release_seat(
                    booking_id=booking_id, seat_id=seat_id, showtime_id=showtime_id
                )
            except CustomBaseError as e:
                metrics.record_seat_operation(
                    operation='release',
                    result=type(e).__name__,
                    duration=time.perf_counter() - started,
                )
                raise

        metrics.record_seat_operation(
            operation='release', result='success', duration=time.perf_counter() - started
        )
        return summary

    async def _release_seat(
        self, *, booking_id: UUID, seat_id: UUID, showtime_id: UUID
    ) -> BookingSummary:
        async with self.seat_lock_manager.acquire(seat_id=seat_id, showtime_id=showtime_id):
            async with self.seat_lock_manager.acquire_booking(booking_id=booking_id):
                async with self.uow_factory() as uow:
                    booking = await uow.booking_command_repo.get_by_id(
                        booking_id=booking_id, for_update=True
                    )
                    if not booking:
                        raise NotFoundError('Booking not found')

                    now = self.clock.now()
                    if booking.is_lapsed_pending(now=now):
                        await reclaim_lapsed_booking(uow, booking=booking, now=now)
                        await uow.commit()
                        raise BookingExpiredError()

                    seat_slot = await uow.seat_slot_command_repo.get_for_update(
                        seat_id=seat_id, showtime_id=showtime_id
                    )
                    if not seat_slot:
                        raise NotFoundError('Seat not found for this showtime')
                    if not seat_slot.is_held_by(booking.id):
                        raise SeatNotHeldByBookingError()

                    await uow.seat_slot_command_repo.update(seat_slot=seat_slot.release())
                    updated = await uow.booking_command_repo.update(
                        booking=booking.remove_seat(price=seat_slot.price, now=now)
                    )
                    await uow.commit()

        Logger.base.info(
            f'🪑 [RELEASE] Booking {booking_id} released seat {seat_id} '
            f'({updated.seat_count} seat(s), {updated.total_price})'
        )
        return BookingSummary.from_booking(updated)
