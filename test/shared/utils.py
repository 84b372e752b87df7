from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, List, Tuple
from uuid import UUID

from sqlalchemy import update

from src.platform.clock import Clock
from src.platform.config.core_setting import Settings
from src.platform.database.unit_of_work import AbstractUnitOfWork, SqlAlchemyUnitOfWork
from src.service.catalog.app.command.register_screen_use_case import RegisterScreenUseCase
from src.service.catalog.app.command.schedule_showtime_use_case import ScheduleShowtimeUseCase
from src.service.catalog.domain.entity.screen_entity import Screen
from src.service.catalog.domain.entity.showtime_entity import Showtime
from src.service.reservation.domain.domain_event.booking_confirmed_event import (
    BookingConfirmedEvent,
)
from src.service.reservation.domain.entity.seat_slot_entity import SeatSlot
from src.service.reservation.driven_adapter.model.seat_slot_model import SeatSlotModel
from src.service.reservation.driven_adapter.notifier.log_booking_notifier import (
    LogBookingNotifier,
)
from src.service.reservation.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


DEFAULT_NOW = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)


class FrozenClock(Clock):
    def __init__(self, now: datetime = DEFAULT_NOW) -> None:
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, **kwargs: float) -> datetime:
        self._now += timedelta(**kwargs)
        return self._now


class RecordingBookingNotifier(LogBookingNotifier):
    def __init__(self) -> None:
        self.sent_payloads: List[bytes] = []

    async def send_booking_confirmation(self, *, event: BookingConfirmedEvent) -> None:
        await super().send_booking_confirmation(event=event)
        self.sent_payloads.append(self.render_payload(event))


def auth_headers(user_id: int) -> dict[str, str]:
    token = JwtAuth(config=Settings()).create_jwt_token(user_id=user_id)
    return {'Authorization': f'Bearer {token}'}


async def seed_showtime(
    uow_factory: Callable[[], AbstractUnitOfWork],
    *,
    clock: Clock,
    num_rows: int = 2,
    num_cols: int = 5,
    price: Decimal = Decimal('15.00'),
    starts_in: timedelta = timedelta(days=1),
    duration: timedelta = timedelta(hours=2),
    cinema_name: str = 'Riverside',
    screen_name: str = 'Screen 1',
    movie_title: str = 'The Long Night',
) -> Tuple[Screen, Showtime, List[SeatSlot]]:
    """Register a screen, schedule one showtime on it and return its seat slots"""
    screen = await RegisterScreenUseCase(uow_factory=uow_factory).register_screen(
        cinema_name=cinema_name, name=screen_name, num_rows=num_rows, num_cols=num_cols
    )
    start_time = clock.now() + starts_in
    showtime = await ScheduleShowtimeUseCase(uow_factory=uow_factory).schedule_showtime(
        movie_title=movie_title,
        screen_id=screen.id,
        start_time=start_time,
        end_time=start_time + duration,
        price=price,
    )
    async with uow_factory() as uow:
        seat_slots = await uow.seat_slot_query_repo.list_by_showtime(showtime_id=showtime.id)
    return screen, showtime, seat_slots


async def set_slot_price(
    uow_factory: Callable[[], SqlAlchemyUnitOfWork], *, slot_id: UUID, price: Decimal
) -> None:
    """Reprice one slot directly in the store"""
    async with uow_factory() as uow:
        await uow.session.execute(
            update(SeatSlotModel).where(SeatSlotModel.id == slot_id).values(price=price)
        )
        await uow.commit()
