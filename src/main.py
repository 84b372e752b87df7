"""
Production FastAPI Application

Reservation API plus the background expiry sweeper.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.service.reservation.app.command.sweep_expired_bookings_use_case import (
    SweepExpiredBookingsUseCase,
)
from src.service.reservation.driving_adapter.scheduler.expiry_sweeper import (
    ExpiredBookingSweeper,
)


def build_expiry_sweeper() -> ExpiredBookingSweeper:
    config = container.config_service()
    use_case = SweepExpiredBookingsUseCase(
        uow_factory=container.unit_of_work.provider,
        seat_lock_manager=container.seat_lock_manager(),
        clock=container.clock(),
    )
    return ExpiredBookingSweeper(
        use_case=use_case, interval_seconds=config.EXPIRY_SWEEP_INTERVAL_SECONDS
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Reservation Service] Starting up...')
    config = container.config_service()

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Reservation Service] Dependency injection wired')

    database = container.database()
    if config.AUTO_CREATE_TABLES:
        await database.create_tables()

    async with anyio.create_task_group() as tg:
        if config.ENABLE_EXPIRY_SWEEPER:
            await build_expiry_sweeper().start(task_group=tg)

        Logger.base.info('✅ [Reservation Service] Ready to serve requests')
        yield

        Logger.base.info('🛑 [Reservation Service] Shutting down...')
        tg.cancel_scope.cancel()

    await database.dispose()
    Logger.base.info('🗄️  [Reservation Service] Database engine disposed')

    container.unwire()
    Logger.base.info('👋 [Reservation Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
