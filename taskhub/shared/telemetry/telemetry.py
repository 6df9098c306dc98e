"""OpenTelemetry tracing for the task API.

Exporters: console (development), otlp (collector), none (spans are
sampled and dropped). Setup problems are logged; the API keeps serving
without traces.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

if TYPE_CHECKING:
    from taskhub.core.config import Settings

logger = logging.getLogger(__name__)

# Health probes would otherwise dominate the trace volume.
UNTRACED_URLS = "/api/v1/health"


class TelemetryConfig:
    """Owns the tracer provider and the FastAPI / SQLAlchemy instrumentation."""

    def __init__(
        self,
        service_name: str,
        service_version: str,
        *,
        environment: str = "development",
        exporter: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.exporter = exporter
        self.otlp_endpoint = otlp_endpoint
        self.sample_rate = sample_rate
        self.tracer_provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> TelemetryConfig:
        return cls(
            settings.app_name,
            settings.app_version,
            environment=settings.telemetry_environment,
            exporter=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )

    @property
    def active(self) -> bool:
        return self.tracer_provider is not None

    def build_exporter(self) -> SpanExporter | None:
        """Exporter for the configured name; None means spans are not exported.

        An otlp exporter without an endpoint falls back to the console.
        """
        if self.exporter == "none":
            return None
        if self.exporter == "otlp" and self.otlp_endpoint:
            return OTLPSpanExporter(
                endpoint=self.otlp_endpoint,
                insecure=self.otlp_endpoint.startswith("http://"),
            )
        if self.exporter != "console":
            logger.warning("Exporter %r not usable, falling back to console", self.exporter)
        return ConsoleSpanExporter()

    def start(self) -> bool:
        """Install the global tracer provider. Returns False when setup failed."""
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: self.service_name,
                        SERVICE_VERSION: self.service_version,
                        "deployment.environment": self.environment,
                    }
                ),
                sampler=TraceIdRatioBased(self.sample_rate),
            )
            exporter = self.build_exporter()
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Tracing setup failed; continuing without traces")
            return False
        self.tracer_provider = provider
        logger.info(
            "Tracing started for %s %s (exporter=%s, sample_rate=%s)",
            self.service_name,
            self.service_version,
            self.exporter,
            self.sample_rate,
        )
        return True

    def instrument_app(self, app: FastAPI) -> None:
        """Trace every request except health probes. Call before the app starts serving."""
        if not self.active:
            return
        try:
            FastAPIInstrumentor.instrument_app(
                app,
                tracer_provider=self.tracer_provider,
                excluded_urls=UNTRACED_URLS,
            )
        except Exception:
            logger.exception("FastAPI instrumentation failed")

    def instrument_engine(self, engine: AsyncEngine) -> None:
        """Trace SQL statements issued through the async engine."""
        if not self.active:
            return
        try:
            SQLAlchemyInstrumentor().instrument(
                engine=engine.sync_engine,
                tracer_provider=self.tracer_provider,
            )
        except Exception:
            logger.exception("SQLAlchemy instrumentation failed")

    def shutdown(self) -> None:
        """Flush pending spans and release the provider."""
        if not self.active:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Tracer provider shutdown failed")
        finally:
            self.tracer_provider = None


_telemetry: TelemetryConfig | None = None


def get_telemetry() -> TelemetryConfig | None:
    """Telemetry installed by create_app(), if any."""
    return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    _telemetry = telemetry
