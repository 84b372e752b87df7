"""
Shared FastAPI App Factory

Provides common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.service.catalog.driving_adapter.http_controller.screen_controller import (
    router as screen_router,
)
from src.service.catalog.driving_adapter.http_controller.showtime_controller import (
    router as showtime_router,
)
from src.service.reservation.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.reservation.driving_adapter.http_controller.seat_inventory_controller import (
    router as seat_inventory_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Cinema seat reservation service',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    app.include_router(screen_router, prefix='/api/screen', tags=['screen'])
    app.include_router(showtime_router, prefix='/api/showtime', tags=['showtime'])
    app.include_router(seat_inventory_router, prefix='/api/showtime', tags=['seat'])
    app.include_router(booking_router, prefix='/api/booking', tags=['booking'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    @app.get('/health')
    async def health_check() -> dict[str, str]:
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @app.get('/metrics')
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
