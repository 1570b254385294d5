"""Entry point for the futsal booking FastAPI application."""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import AsyncGenerator

from fastapi import FastAPI

from futsal_booking.api.v1 import router as v1_router
from futsal_booking.core.config import settings
from futsal_booking.core.database import Base, engine, verify_database_connection
from futsal_booking.core.error_handlers import register_exception_handlers
from futsal_booking.services.booking_sweeper import run_daily_sweep

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    verify_database_connection()

    if settings.CREATE_TABLES_ON_STARTUP:
        # Development convenience; production schemas are managed out of band.
        Base.metadata.create_all(bind=engine)

    sweep_task = None
    if settings.BOOKING_SWEEP_ENABLED:
        sweep_task = asyncio.create_task(run_daily_sweep())
        logger.info("Daily booking sweep scheduled")

    yield

    if sweep_task is not None:
        sweep_task.cancel()
        with suppress(asyncio.CancelledError):
            await sweep_task


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

register_exception_handlers(app)

app.include_router(v1_router, prefix=settings.API_PREFIX)


@app.get("/health", tags=["health"])
def health() -> dict:
    return {"status": "ok"}
