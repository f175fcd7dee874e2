"""OpenTelemetry spans around collection searches."""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.trace import Status, StatusCode

from portal_search.observability.context import update_span_id


if TYPE_CHECKING:
    from collections.abc import Generator

    from opentelemetry.trace import Span, Tracer

    from portal_search.domain.search import SearchResult

logger = logging.getLogger(__name__)

_tracer_holder: dict[str, Tracer | None] = {"tracer": None}


def init_tracing(service_name: str = "portal-search") -> TracerProvider:
    """Install a tracer provider and bind the search tracer to it.

    Without exporters attached, spans are created and dropped; callers wanting
    to inspect them add a span processor to the returned provider.
    """
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    trace.set_tracer_provider(provider)
    _tracer_holder["tracer"] = provider.get_tracer(__name__)
    logger.debug("Tracing initialized for service: %s", service_name)
    return provider


def get_tracer() -> Tracer:
    if _tracer_holder["tracer"] is None:
        init_tracing()
    return _tracer_holder["tracer"]  # type: ignore[return-value]


@contextmanager
def create_span(name: str, attributes: dict[str, Any] | None = None) -> Generator[Span, None, None]:
    """Open a span and make it the span id reported in log lines.

    An exception escaping the block marks the span as failed before it
    propagates.
    """
    with get_tracer().start_as_current_span(name, record_exception=False, set_status_on_exception=False) as span:
        for key, value in (attributes or {}).items():
            span.set_attribute(key, value)
        update_span_id(format(span.get_span_context().span_id, "016x"))

        try:
            yield span
        except Exception as exc:
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            span.record_exception(exc)
            raise


def record_search_outcome(span: Span, result: SearchResult | None, error: Exception | None = None) -> None:
    """Annotate a search span with its result size, or with the handled error."""
    span.set_attribute("search.success", error is None)
    if error is not None:
        span.set_status(Status(StatusCode.ERROR, str(error)))
        span.set_attribute("search.error_type", type(error).__name__)
        return
    if result is not None:
        span.set_attribute("search.total_count", result.total_count)
        span.set_attribute("search.returned", len(result.items))
