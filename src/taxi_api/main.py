"""
Application factory.

    uvicorn taxi_api.main:app --reload
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from taxi_api.api.v1 import drivers, passengers
from taxi_api.api.v1.error_handlers import register_exception_handlers
from taxi_api.config.settings import Settings, get_settings
from taxi_api.core.logging import RequestIDMiddleware, setup_logging
from taxi_api.database.base import Base
from taxi_api.database.session import get_engine

# Registers every model on Base.metadata
import taxi_api.models  # noqa: F401

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = get_engine()
        if settings.AUTO_CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created", extra={"env": settings.ENV})
        yield
        await engine.dispose()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

    app.add_middleware(RequestIDMiddleware)
    app.include_router(passengers.router)
    app.include_router(drivers.router)
    register_exception_handlers(app)

    logger.info("Application configured", extra={"env": settings.ENV, "app_name": settings.APP_NAME})
    return app


app = create_app()
