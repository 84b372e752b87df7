from datetime import timedelta
from typing import Callable, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.clock import Clock
from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.state.seat_lock import SeatLockManager
from src.service.reservation.app.command.booking_expiry import reclaim_lapsed_booking
from src.service.reservation.app.dto.booking_dto import BookingSummary
from src.service.reservation.domain.enum.booking_status import BookingStatus
from src.service.reservation.domain.enum.seat_status import SeatStatus
from src.service.reservation.domain.reservation_errors import (
    BookingExpiredError,
    CancellationWindowClosedError,
    InvalidBookingStateError,
)


class CancelBookingUseCase:
    """
    User-initiated cancellation, allowed only while the showtime start is more than the
    cutoff away. Frees every seat the booking owns, held or booked.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        seat_lock_manager: SeatLockManager,
        clock: Clock,
        cancellation_cutoff_minutes: int,
    ) -> None:
        self.uow_factory = uow_factory
        self.seat_lock_manager = seat_lock_manager
        self.clock = clock
        self.cancellation_cutoff_minutes = cancellation_cutoff_minutes

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
            cancellation_cutoff_minutes=config.CANCELLATION_CUTOFF_MINUTES,
        )

    @Logger.io
    async def cancel_booking(self, *, booking_id: UUID) -> BookingSummary:
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

                showtime = await uow.catalog_query_repo.get_showtime(
                    showtime_id=booking.showtime_id
                )
                if not showtime:
                    raise NotFoundError('Showtime not found')

                cutoff = timedelta(minutes=self.cancellation_cutoff_minutes)
                if showtime.start_time - now <= cutoff:
                    raise CancellationWindowClosedError(self.cancellation_cutoff_minutes)

                if booking.status in (BookingStatus.CANCELLED, BookingStatus.EXPIRED):
                    raise InvalidBookingStateError(
                        f'Booking is already {booking.status.value.lower()}'
                    )

                owned_slots = await uow.seat_slot_command_repo.list_by_booking(
                    booking_id=booking.id, statuses=[SeatStatus.HELD, SeatStatus.BOOKED]
                )
                await uow.seat_slot_command_repo.update_many(
                    seat_slots=[seat_slot.release() for seat_slot in owned_slots]
                )
                cancelled = await uow.booking_command_repo.update(
                    booking=booking.cancel(now=now)
                )
                await uow.commit()

        metrics.record_booking_transition(status='cancelled')
        Logger.base.info(
            f'🚫 [CANCEL] Booking {booking_id} cancelled, freed {len(owned_slots)} seat(s)'
        )
        return BookingSummary.from_booking(cancelled)
