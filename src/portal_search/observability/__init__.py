"""Observability module for OpenTelemetry-aligned tracing, metrics, and logging."""

from portal_search.observability.context import collection_scope, get_trace_context, trace_context
from portal_search.observability.logging import JsonFormatter, configure_logging
from portal_search.observability.metrics import (
    SEARCH_ERROR_COUNT,
    SEARCH_LATENCY,
    SEARCH_REQUEST_COUNT,
    track_latency,
)
from portal_search.observability.tracing import create_span, init_tracing, record_search_outcome


__all__ = [
    "SEARCH_ERROR_COUNT",
    "SEARCH_LATENCY",
    "SEARCH_REQUEST_COUNT",
    "JsonFormatter",
    "collection_scope",
    "configure_logging",
    "create_span",
    "get_trace_context",
    "init_tracing",
    "record_search_outcome",
    "trace_context",
    "track_latency",
]
