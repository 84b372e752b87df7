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
from src.service.reservation.app.dto.booking_dto import BookingSummary
from src.service.reservation.domain.entity.booking_entity import Booking


class CreateBookingUseCase:
    """
    Open an empty PENDING booking for a showtime.

    No seats are touched; the hold window starts now and is never extended.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        clock: Clock,
        hold_window_minutes: int,
    ) -> None:
        self.uow_factory = uow_factory
        self.clock = clock
        self.hold_window = timedelta(minutes=hold_window_minutes)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        clock: Clock = Depends(Provide[Container.clock]),
        config: Settings = Depends(Provide[Container.config_service]),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            clock=clock,
            hold_window_minutes=config.BOOKING_HOLD_WINDOW_MINUTES,
        )

    @Logger.io
    async def create_booking(self, *, showtime_id: UUID, user_id: int) -> BookingSummary:
        async with self.uow_factory() as uow:
            showtime = await uow.catalog_query_repo.get_showtime(showtime_id=showtime_id)
            if not showtime:
                raise NotFoundError('Showtime not found')

            booking = Booking.create(
                user_id=user_id,
                showtime_id=showtime_id,
                now=self.clock.now(),
                hold_window=self.hold_window,
            )
            await uow.booking_command_repo.create(booking=booking)
            await uow.commit()

        metrics.record_booking_transition(status='pending')
        Logger.base.info(
            f'🎟️ [BOOKING] Created {booking.id} for user {user_id}, expires {booking.expires_at}'
        )
        return BookingSummary.from_booking(booking)
