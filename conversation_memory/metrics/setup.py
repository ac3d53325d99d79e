"""OpenTelemetry metrics initialization."""

import os
import sys
from typing import Optional

from opentelemetry import metrics
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricReader,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource

from conversation_memory import __version__

_meter: Optional[metrics.Meter] = None


def setup_metrics() -> metrics.Meter:
    """
    Initialize OpenTelemetry metrics with optional console and OTLP exporters.

    Environment Variables:
        OTEL_SERVICE_NAME: Service name for metrics (default: conversation-memory)
        OTEL_EXPORTER_OTLP_ENDPOINT: Optional OTLP collector endpoint
        OTEL_METRIC_EXPORT_INTERVAL: Export interval in milliseconds (default: 10000)
        OTEL_METRICS_CONSOLE: "true" to print metrics to stderr

    Returns:
        Configured Meter instance for creating instruments
    """
    global _meter

    if _meter is not None:
        return _meter

    service_name = os.getenv("OTEL_SERVICE_NAME", "conversation-memory")
    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
            "deployment.environment": os.getenv("OTEL_ENVIRONMENT", "development"),
        }
    )

    readers: list[MetricReader] = []
    export_interval_ms = int(os.getenv("OTEL_METRIC_EXPORT_INTERVAL", "10000"))

    # stdout belongs to the STDIO transport, so console output goes to stderr
    if os.getenv("OTEL_METRICS_CONSOLE", "false").lower() == "true":
        readers.append(
            PeriodicExportingMetricReader(
                ConsoleMetricExporter(out=sys.stderr),
                export_interval_millis=export_interval_ms,
            )
        )

    otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if otlp_endpoint:
        readers.append(
            PeriodicExportingMetricReader(
                OTLPMetricExporter(endpoint=otlp_endpoint),
                export_interval_millis=export_interval_ms,
            )
        )

    provider = MeterProvider(resource=resource, metric_readers=readers)
    metrics.set_meter_provider(provider)

    _meter = provider.get_meter(__name__)
    return _meter


def get_meter() -> metrics.Meter:
    """
    Get the configured Meter, or the global one if setup_metrics() was never called.

    The global meter is a no-op proxy until a provider is installed.
    """
    if _meter is None:
        return metrics.get_meter(__name__)
    return _meter
