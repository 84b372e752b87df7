from typing import Callable, Self
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from src.platform.clock import Clock
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics
from src.platform.state.seat_lock import SeatLockManager
from src.service.reservation.app.command.booking_expiry import reclaim_lapsed_booking
from src.service.reservation.app.interface.i_booking_notifier import IBookingNotifier
from src.service.reservation.domain.domain_event.booking_confirmed_event import (
    BookingConfirmedEvent,
    ConfirmedSeat,
)
from src.service.reservation.domain.enum.booking_status import BookingStatus
from src.service.reservation.domain.enum.seat_status import SeatStatus
from src.service.reservation.domain.reservation_errors import (
    BookingExpiredError,
    InvalidBookingStateError,
    NoSeatsHeldError,
)


class ConfirmBookingUseCase:
    """
    PENDING -> CONFIRMED, every HELD seat of the booking -> BOOKED, in one unit.

    The confirmation notice goes out after commit; a notifier failure is logged and
    never undoes the confirmation.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        seat_lock_manager: SeatLockManager,
        clock: Clock,
        notifier: IBookingNotifier,
    ) -> None:
        self.uow_factory = uow_factory
        self.seat_lock_manager = seat_lock_manager
        self.clock = clock
        self.notifier = notifier
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
        notifier: IBookingNotifier = Depends(Provide[Container.booking_notifier]),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            seat_lock_manager=seat_lock_manager,
            clock=clock,
            notifier=notifier,
        )

    @Logger.io
    async def confirm_booking(self, *, booking_id: UUID) -> BookingConfirmedEvent:
        with self.tracer.start_as_current_span(
            'use_case.confirm_booking', attributes={'booking.id': str(booking_id)}
        ):
            event = await self._confirm(booking_id=booking_id)

        metrics.record_booking_transition(status='confirmed')
        await self._notify(event=event)
        return event

    async def _confirm(self, *, booking_id: UUID) -> BookingConfirmedEvent:
        async with self.seat_lock_manager.acquire_booking(booking_id=booking_id):
            async with self.uow_factory() as uow:
                booking = await uow.booking_command_repo.get_by_id(
                    booking_id=booking_id, for_update=True
                )
                if not booking:
                    raise NotFoundError('Booking not found')
                if booking.status != BookingStatus.PENDING:
                    raise InvalidBookingStateError('Booking is not in pending state')

                now = self.clock.now()
                if booking.is_expired(now=now):
                    await reclaim_lapsed_booking(uow, booking=booking, now=now)
                    await uow.commit()
                    raise BookingExpiredError()

                held_slots = await uow.seat_slot_command_repo.list_by_booking(
                    booking_id=booking.id, statuses=[SeatStatus.HELD]
                )
                if not held_slots:
                    raise NoSeatsHeldError()
                showtime = await uow.catalog_query_repo.get_showtime(
                    showtime_id=booking.showtime_id
                )
                if not showtime:
                    raise NotFoundError('Showtime not found')

                await uow.seat_slot_command_repo.update_many(
                    seat_slots=[seat_slot.book() for seat_slot in held_slots]
                )
                confirmed = await uow.booking_command_repo.update(
                    booking=booking.confirm(now=now)
                )
                await uow.commit()

        Logger.base.info(
            f'✅ [CONFIRM] Booking {booking_id} confirmed with {confirmed.seat_count} seat(s)'
        )
        return BookingConfirmedEvent(
            booking_id=confirmed.id,
            user_id=confirmed.user_id,
            showtime_id=confirmed.showtime_id,
            movie_title=showtime.movie_title,
            cinema_name=showtime.cinema_name,
            screen_name=showtime.screen_name,
            start_time=showtime.start_time,
            seat_count=confirmed.seat_count,
            total_price=confirmed.total_price,
            confirmed_at=now,
            seats=[
                ConfirmedSeat(
                    seat_id=seat_slot.seat_id,
                    seat_number=seat_slot.seat_number,
                    seat_type=seat_slot.seat_type,
                    price=seat_slot.price,
                )
                for seat_slot in held_slots
            ],
        )

    async def _notify(self, *, event: BookingConfirmedEvent) -> None:
        try:
            await self.notifier.send_booking_confirmation(event=event)
        except Exception as e:
            Logger.base.error(
                f'📧 [NOTIFY] Confirmation notice for booking {event.booking_id} failed: {e}'
            )
