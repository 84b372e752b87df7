from typing import Callable, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.clock import Clock
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.state.seat_lock import SeatLockManager
from src.service.reservation.app.command.booking_expiry import reclaim_lapsed_booking
from src.service.reservation.domain.enum.booking_status import BookingStatus


class SweepExpiredBookingsUseCase:
    """
    Reclaim every PENDING booking whose hold window has passed.

    Each booking is reclaimed in its own unit of work under its booking lock, so a
    failure on one booking never blocks the rest. Running the sweep twice against
    the same clock reading changes nothing the second time.
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
    async def sweep(self) -> int:
        now = self.clock.now()
        async with self.uow_factory() as uow:
            lapsed_ids = await uow.booking_command_repo.list_lapsed_pending_ids(now=now)

        if not lapsed_ids:
            metrics.record_sweep(result='empty')
            return 0

        reclaimed = 0
        failures = 0
        for booking_id in lapsed_ids:
            try:
                if await self._reclaim(booking_id=booking_id):
                    reclaimed += 1
            except Exception:
                failures += 1
                Logger.base.exception(f'⌛ [SWEEP] Failed to reclaim booking {booking_id}')

        metrics.record_sweep(result='partial' if failures else 'success', failures=failures)
        Logger.base.info(
            f'⌛ [SWEEP] Reclaimed {reclaimed}/{len(lapsed_ids)} lapsed booking(s), '
            f'{failures} failure(s)'
        )
        return reclaimed

    async def _reclaim(self, *, booking_id: UUID) -> bool:
        async with self.seat_lock_manager.acquire_booking(booking_id=booking_id):
            async with self.uow_factory() as uow:
                booking = await uow.booking_command_repo.get_by_id(
                    booking_id=booking_id, for_update=True
                )
                now = self.clock.now()
                # Confirmed or reclaimed since the listing
                if (
                    not booking
                    or booking.status != BookingStatus.PENDING
                    or not booking.expires_at < now
                ):
                    return False

                await reclaim_lapsed_booking(uow, booking=booking, now=now)
                await uow.commit()
                return True
