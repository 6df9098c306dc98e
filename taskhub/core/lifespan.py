"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring (logging, SQL instrumentation,
telemetry shutdown, DB engine dispose). No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from taskhub.core.config import get_settings
from taskhub.infrastructure.persistence import database
from taskhub.shared.telemetry import setup_logging
from taskhub.shared.telemetry.telemetry import get_telemetry, set_telemetry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Telemetry itself is configured in create_app() because FastAPI
    instrumentation must happen before the middleware stack is built.
    Shutdown order: telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.instrument_engine(database.get_engine())

    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield

    telemetry = get_telemetry()
    if telemetry is not None:
        telemetry.shutdown()
        set_telemetry(None)

    await database.dispose_engine()
    logger.info("Database engine disposed")
