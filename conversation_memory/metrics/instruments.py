"""Metric instruments for the Conversation Memory MCP Server."""

import time
from contextlib import contextmanager
from typing import Iterator, Optional

from opentelemetry import metrics

from conversation_memory.metrics.setup import get_meter


class MetricInstruments:
    """
    Instruments for calls to the remote embedding service.

    SLI Focus:
        - p95 latency (histogram)
        - error rate (counters)
    """

    def __init__(self, meter: Optional[metrics.Meter] = None):
        meter = meter or get_meter()

        self.api_duration = meter.create_histogram(
            name="conversation_memory.api.duration",
            description="Embedding service call latency in seconds",
            unit="s",
        )
        self.api_calls = meter.create_counter(
            name="conversation_memory.api.calls",
            description="Successful embedding service calls by operation",
            unit="1",
        )
        self.api_errors = meter.create_counter(
            name="conversation_memory.api.errors",
            description="Failed embedding service calls by operation and outcome",
            unit="1",
        )

    @contextmanager
    def track_api_call(self, operation: str) -> Iterator[dict]:
        """
        Track latency and outcome of one embedding service call.

        The caller sets ``outcome["status"]`` to a failure label
        ("remote_error", "transport_error", "invalid_response") when the call
        did not succeed.

        Example:
            with instruments.track_api_call("store") as outcome:
                response = await client.post(url, json=payload)
                if response.is_error:
                    outcome["status"] = "remote_error"
        """
        start = time.perf_counter()
        outcome = {"status": "success"}

        try:
            yield outcome
        except Exception as e:
            if outcome["status"] == "success":
                outcome["status"] = type(e).__name__
            raise
        finally:
            duration = time.perf_counter() - start
            attributes = {"operation": operation, "status": outcome["status"]}

            self.api_duration.record(duration, attributes)
            if outcome["status"] == "success":
                self.api_calls.add(1, {"operation": operation})
            else:
                self.api_errors.add(1, attributes)


# Singleton instance
_instruments: Optional[MetricInstruments] = None


def get_instruments() -> MetricInstruments:
    """Get singleton MetricInstruments instance."""
    global _instruments

    if _instruments is None:
        _instruments = MetricInstruments()

    return _instruments
