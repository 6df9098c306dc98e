"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See taskhub.core.lifespan and taskhub.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from taskhub.api.v1 import api_router
from taskhub.core.config import Settings, get_settings
from taskhub.core.exception_handlers import register_exception_handlers
from taskhub.core.lifespan import create_lifespan
from taskhub.core.limiter import limiter
from taskhub.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

logger = logging.getLogger(__name__)


def _setup_telemetry(app: FastAPI, settings: Settings) -> None:
    """Start tracing and instrument the app before its middleware stack is built."""
    telemetry = TelemetryConfig.from_settings(settings)
    if telemetry.start():
        set_telemetry(telemetry)
        telemetry.instrument_app(app)


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api/v1")

    if settings.telemetry_enabled:
        _setup_telemetry(app, settings)

    return app


app = create_app()
