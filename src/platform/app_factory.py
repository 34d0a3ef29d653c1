"""
Shared FastAPI App Factory

Provides common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.turf_booking.driving_adapter.http_controller.analytics_controller import (
    router as analytics_router,
)
from src.service.turf_booking.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.turf_booking.driving_adapter.http_controller.maintenance_controller import (
    router as maintenance_router,
)
from src.service.turf_booking.driving_adapter.http_controller.review_controller import (
    router as review_router,
)
from src.service.turf_booking.driving_adapter.http_controller.slot_controller import (
    router as slot_router,
)
from src.service.turf_booking.driving_adapter.http_controller.venue_controller import (
    router as venue_router,
)


def create_app(
    *,
    lifespan: Optional[Callable[[FastAPI], AbstractAsyncContextManager[Any]]] = None,
    title_suffix: str = '',
    description: str = 'Turf venue and slot booking',
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

    # Auto-instrument FastAPI (must be done before mounting routes)
    TracingConfig.instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    app.include_router(venue_router, prefix='/api/venue', tags=['venue'])
    app.include_router(slot_router, prefix='/api/slot', tags=['slot'])
    app.include_router(booking_router, prefix='/api/booking', tags=['booking'])
    app.include_router(review_router, prefix='/api/review', tags=['review'])
    app.include_router(analytics_router, prefix='/api/analytics', tags=['analytics'])
    app.include_router(maintenance_router, prefix='/api/maintenance', tags=['maintenance'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    """Register health and metrics endpoints."""

    @app.get('/health')
    async def health_check() -> dict[str, str]:
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @app.get('/metrics')
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
