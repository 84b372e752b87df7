"""
Test Configuration and Fixtures

- Environment variables are set before any application module is imported
- Integration tests get a fresh SQLite database file per test (tmp_path)
- Unit tests (test/**/unit/) use AsyncMock collaborators and never touch the store
- API tests drive the FastAPI test app through TestClient with container overrides
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings and the loguru sinks are built at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['ENABLE_EXPIRY_SWEEPER'] = 'false'
    os.environ['AUTO_CREATE_TABLES'] = 'true'
    os.environ.pop('POSTGRES_SERVER', None)
    os.environ.pop('DATABASE_URL_ASYNC', None)


_early_setup_test_environment()

from collections.abc import AsyncIterator, Callable, Iterator  # noqa: E402
from functools import partial  # noqa: E402

from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.di import cleanup, container  # noqa: E402
from src.platform.database.db_setting import Database  # noqa: E402
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from src.platform.state.seat_lock import SeatLockManager  # noqa: E402
from src.service.catalog.domain.entity.showtime_entity import Showtime  # noqa: E402
from src.service.reservation.app.command.cancel_booking_use_case import (  # noqa: E402
    CancelBookingUseCase,
)
from src.service.reservation.app.command.confirm_booking_use_case import (  # noqa: E402
    ConfirmBookingUseCase,
)
from src.service.reservation.app.command.create_booking_use_case import (  # noqa: E402
    CreateBookingUseCase,
)
from src.service.reservation.app.command.hold_seat_use_case import HoldSeatUseCase  # noqa: E402
from src.service.reservation.app.command.release_seat_use_case import (  # noqa: E402
    ReleaseSeatUseCase,
)
from src.service.reservation.app.command.sweep_expired_bookings_use_case import (  # noqa: E402
    SweepExpiredBookingsUseCase,
)
from src.service.reservation.domain.entity.seat_slot_entity import SeatSlot  # noqa: E402
from test.shared.utils import (  # noqa: E402
    FrozenClock,
    RecordingBookingNotifier,
    seed_showtime,
)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        path = str(item.path)
        if '/unit/' in path:
            item.add_marker(pytest.mark.unit)
        elif '/integration/' in path:
            item.add_marker(pytest.mark.integration)
        elif '/api/' in path:
            item.add_marker(pytest.mark.api)


# =============================================================================
# Store
# =============================================================================
@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
async def database(tmp_path: Path) -> AsyncIterator[Database]:
    db = Database(db_url=f'sqlite+aiosqlite:///{tmp_path / "reservation_test.db"}')
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], SqlAlchemyUnitOfWork]:
    return partial(SqlAlchemyUnitOfWork, session_factory=database.session_maker)


@pytest.fixture
def seat_lock_manager() -> SeatLockManager:
    return SeatLockManager(shards=64, timeout_seconds=30)


@pytest.fixture
def notifier() -> RecordingBookingNotifier:
    return RecordingBookingNotifier()


# =============================================================================
# Use cases wired to the test store
# =============================================================================
@pytest.fixture
def create_booking_use_case(uow_factory, clock) -> CreateBookingUseCase:
    return CreateBookingUseCase(uow_factory=uow_factory, clock=clock, hold_window_minutes=15)


@pytest.fixture
def hold_seat_use_case(uow_factory, seat_lock_manager, clock) -> HoldSeatUseCase:
    return HoldSeatUseCase(
        uow_factory=uow_factory,
        seat_lock_manager=seat_lock_manager,
        clock=clock,
        max_seats_per_booking=12,
    )


@pytest.fixture
def release_seat_use_case(uow_factory, seat_lock_manager, clock) -> ReleaseSeatUseCase:
    return ReleaseSeatUseCase(
        uow_factory=uow_factory, seat_lock_manager=seat_lock_manager, clock=clock
    )


@pytest.fixture
def confirm_booking_use_case(
    uow_factory, seat_lock_manager, clock, notifier
) -> ConfirmBookingUseCase:
    return ConfirmBookingUseCase(
        uow_factory=uow_factory,
        seat_lock_manager=seat_lock_manager,
        clock=clock,
        notifier=notifier,
    )


@pytest.fixture
def cancel_booking_use_case(uow_factory, seat_lock_manager, clock) -> CancelBookingUseCase:
    return CancelBookingUseCase(
        uow_factory=uow_factory,
        seat_lock_manager=seat_lock_manager,
        clock=clock,
        cancellation_cutoff_minutes=60,
    )


@pytest.fixture
def sweep_use_case(uow_factory, seat_lock_manager, clock) -> SweepExpiredBookingsUseCase:
    return SweepExpiredBookingsUseCase(
        uow_factory=uow_factory, seat_lock_manager=seat_lock_manager, clock=clock
    )


@pytest.fixture
async def showtime_with_seats(uow_factory, clock) -> tuple[Showtime, list[SeatSlot]]:
    """2 x 5 screen, one showtime tomorrow at 15.00 per seat"""
    _, showtime, seat_slots = await seed_showtime(uow_factory, clock=clock)
    return showtime, seat_slots


# =============================================================================
# HTTP
# =============================================================================
@pytest.fixture
def client(tmp_path: Path, clock: FrozenClock) -> Iterator[TestClient]:
    from test.test_main import app

    database = Database(db_url=f'sqlite+aiosqlite:///{tmp_path / "api_test.db"}')
    container.database.override(providers.Object(database))
    container.clock.override(providers.Object(clock))
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        container.database.reset_override()
        container.clock.reset_override()
        cleanup()
