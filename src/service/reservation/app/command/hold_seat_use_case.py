import time
from typing import Callable, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.clock import Clock
from src.platform.config.core_setting import Settings
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
    HoldLimitExceededError,
    SeatUnavailableError,
)


class HoldSeatUseCase:
    """
    Hold one seat slot for a booking.

    Check order, all under the seat lock and the booking lock:
    1. Booking exists
    2. Booking is PENDING and inside its hold window
       (a lapsed PENDING booking is reclaimed and committed before failing)
    3. Seat slot exists for (seat_id, showtime_id) in the booking's showtime
    4. Seat slot is AVAILABLE
    5. Booking holds fewer than the per-booking cap

    The booking row is locked before the seat row, the same order confirm, cancel
    and the expiry sweeper use. The seat mutation and the booking's
    seat_count / total_price change commit together.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        seat_lock_manager: SeatLockManager,
        clock: Clock,
        max_seats_per_booking: int,
    ) -> None:
        self.uow_factory = uow_factory
        self.seat_lock_manager = seat_lock_manager
        self.clock = clock
        self.max_seats_per_booking = max_seats_per_booking
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
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            seat_lock_manager=seat_lock_manager,
            clock=clock,
            max_seats_per_booking=config.MAX_SEATS_PER_BOOKING,
        )

    @Logger.io
    async def hold_seat(
        self, *, booking_id: UUID, seat_id: UUID, showtime_id: UUID, user_id: int
    ) -> BookingSummary:
        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.hold_seat',
            attributes={
                'booking.id': str(booking_id),
                'seat.id': str(seat_id),
                'showtime.id': str(showtime_id),
                'user.id': user_id,
            },
        ):
            try:
                summary = await self._hold_seat(
                    booking_id=booking_id, seat_id=seat_id, showtime_id=showtime_id
                )
            except CustomBaseError as e:
                metrics.record_seat_operation(
                    operation='hold', result=type(e).__name__, duration=time.perf_counter() - started
                )
                raise

        metrics.record_seat_operation(
            operation='hold', result='success', duration=time.perf_counter() - started
        )
        return summary

    async def _hold_seat(
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
                    booking.ensure_pending()

                    if booking.showtime_id != showtime_id:
                        raise NotFoundError('Seat not found for this booking showtime')
                    seat_slot = await uow.seat_slot_command_repo.get_for_update(
                        seat_id=seat_id, showtime_id=showtime_id
                    )
                    if not seat_slot:
                        raise NotFoundError('Seat not found for this showtime')

                    if not seat_slot.is_available:
                        raise SeatUnavailableError()

                    held_count = await uow.seat_slot_command_repo.count_held_by_booking(
                        booking_id=booking.id
                    )
                    if held_count >= self.max_seats_per_booking:
                        raise HoldLimitExceededError(self.max_seats_per_booking)

                    await uow.seat_slot_command_repo.update(
                        seat_slot=seat_slot.hold(booking_id=booking.id, until=booking.expires_at)
                    )
                    updated = await uow.booking_command_repo.update(
                        booking=booking.add_seat(price=seat_slot.price, now=now)
                    )
                    await uow.commit()

        Logger.base.info(
            f'🪑 [HOLD] Booking {booking_id} holds seat {seat_id} '
            f'({updated.seat_count} seat(s), {updated.total_price})'
        )
        return BookingSummary.from_booking(updated)
