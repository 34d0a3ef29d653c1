"""
Production FastAPI Application
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import dispose_engines, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.logging.service_context import get_service_name
from src.platform.observability.tracing import TracingConfig
from src.service.turf_booking.driven_adapter.model import register_models


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Turf Booking] Starting up...')

    tracing = TracingConfig(service_name=get_service_name())
    tracing.setup()
    Logger.base.info('📊 [Turf Booking] OpenTelemetry tracing configured')

    register_models()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Turf Booking] Dependency injection wired')

    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('🗄️  [Turf Booking] Database engine ready + instrumented')

    try:
        async with anyio.create_task_group() as tg:
            # Inject background task group into DI container for email delivery
            container.task_group.override(tg)
            Logger.base.info('✅ [Turf Booking] Ready to serve requests')
            yield
            # Pending emails finish before the engines are disposed
            Logger.base.info('🛑 [Turf Booking] Shutting down...')
    finally:
        container.task_group.reset_override()
        await dispose_engines()
        tracing.shutdown()
        Logger.base.info('👋 [Turf Booking] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    return RedirectResponse(url='/docs')
