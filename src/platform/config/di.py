"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.clock import SystemClock
from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.platform.state.seat_lock import SeatLockManager
from src.service.reservation.driven_adapter.notifier.log_booking_notifier import (
    LogBookingNotifier,
)
from src.service.reservation.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database
    database = providers.Singleton(Database, db_url=config_service.provided.DATABASE_URL_ASYNC)

    # Unit of Work (new session per unit; inject `unit_of_work.provider` for a factory)
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session_maker
    )

    # Time source
    clock = providers.Singleton(SystemClock)

    # Per-seat mutual exclusion for the hold engine
    seat_lock_manager = providers.Singleton(
        SeatLockManager,
        shards=config_service.provided.SEAT_LOCK_SHARDS,
        timeout_seconds=config_service.provided.SEAT_LOCK_TIMEOUT_SECONDS,
    )

    # Notification collaborator
    booking_notifier = providers.Singleton(LogBookingNotifier)

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth, config=config_service)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
