"""OpenTelemetry metrics for the Conversation Memory MCP Server."""

from conversation_memory.metrics.instruments import get_instruments
from conversation_memory.metrics.setup import get_meter, setup_metrics

__all__ = ["setup_metrics", "get_meter", "get_instruments"]
