"""TelemetryConfig exporter selection and inactive no-ops."""

from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from taskhub.core.config import get_settings
from taskhub.shared.telemetry.telemetry import TelemetryConfig


def _config(**kwargs) -> TelemetryConfig:
    return TelemetryConfig("taskhub", "1.0.0", **kwargs)


def test_exporter_selection() -> None:
    assert _config(exporter="none").build_exporter() is None
    assert isinstance(_config(exporter="console").build_exporter(), ConsoleSpanExporter)
    assert isinstance(
        _config(exporter="otlp", otlp_endpoint="http://localhost:4317").build_exporter(),
        OTLPSpanExporter,
    )


def test_otlp_without_endpoint_falls_back_to_console() -> None:
    assert isinstance(_config(exporter="otlp").build_exporter(), ConsoleSpanExporter)
    assert isinstance(_config(exporter="zipkin").build_exporter(), ConsoleSpanExporter)


def test_from_settings_copies_fields() -> None:
    settings = get_settings()
    telemetry = TelemetryConfig.from_settings(settings)
    assert telemetry.service_name == settings.app_name
    assert telemetry.sample_rate == settings.telemetry_sample_rate
    assert telemetry.active is False


def test_inactive_config_is_a_no_op() -> None:
    telemetry = _config()
    telemetry.instrument_engine(None)
    telemetry.shutdown()
    assert telemetry.active is False
