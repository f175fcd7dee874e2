"""Unit tests for observability module."""

import json
import logging
import sys

from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode
from prometheus_client import REGISTRY
import pytest

from portal_search.domain.search import SearchResult
from portal_search.observability import (
    SEARCH_LATENCY,
    SEARCH_REQUEST_COUNT,
    JsonFormatter,
    collection_scope,
    configure_logging,
    create_span,
    get_trace_context,
    init_tracing,
    record_search_outcome,
    trace_context,
    track_latency,
)
from portal_search.observability.context import update_span_id


def _record(msg: str = "test message", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="portal_search.service_layer.search_service",
        level=logging.INFO,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def isolated_trace_context():
    token = trace_context.set(None)
    yield
    trace_context.reset(token)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def span_exporter():
    exporter = InMemorySpanExporter()
    provider = init_tracing("test-service")
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return exporter


@pytest.mark.unit
class TestJsonFormatter:
    """Tests for structured JSON logging."""

    def test_format_includes_trace_context(self):
        trace_context.set({"trace_id": "a" * 32, "span_id": "b" * 16})

        with collection_scope("notes"):
            data = json.loads(JsonFormatter().format(_record()))

        assert data["message"] == "test message"
        assert data["level"] == "INFO"
        assert data["trace_id"] == "a" * 32
        assert data["span_id"] == "b" * 16
        assert data["collection"] == "notes"
        assert data["component"] == "search_service"

    def test_collection_omitted_outside_a_search(self):
        data = json.loads(JsonFormatter().format(_record()))

        assert "collection" not in data

    def test_extra_fields_are_included(self):
        data = json.loads(JsonFormatter().format(_record(query="quran", total_count=3)))

        assert data["query"] == "quran"
        assert data["total_count"] == 3

    def test_secret_fields_are_redacted(self):
        data = json.loads(JsonFormatter().format(_record(api_key="sk-123", token="abc")))

        assert data["api_key"] == "[REDACTED]"
        assert data["token"] == "[REDACTED]"

    def test_long_message_is_truncated(self):
        data = json.loads(JsonFormatter().format(_record("x" * 3000)))

        assert len(data["message"]) == JsonFormatter.MAX_MESSAGE_LEN + 3
        assert data["message"].endswith("...")

    def test_non_json_values_are_stringified(self):
        data = json.loads(JsonFormatter().format(_record(fields={"title"}, error=ValueError("bad"))))

        assert data["fields"] == ["title"]
        assert data["error"] == "bad"

    def test_exception_is_rendered(self):
        try:
            raise RuntimeError("index unavailable")
        except RuntimeError:
            record = _record()
            record.exc_info = sys.exc_info()

        data = json.loads(JsonFormatter().format(record))

        assert "RuntimeError: index unavailable" in data["exception"]


@pytest.mark.unit
@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    def test_json_handler_on_stderr(self):
        configure_logging("debug", json_output=True)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_plain_handler(self):
        configure_logging("warning", json_output=False)

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_unknown_level_falls_back_to_info(self):
        configure_logging("chatty")
        assert logging.getLogger().level == logging.INFO


@pytest.mark.unit
class TestTraceContext:
    def test_generates_ids_when_missing(self):
        ctx = get_trace_context()

        assert len(ctx["trace_id"]) == 32
        assert len(ctx["span_id"]) == 16
        assert get_trace_context() is ctx

    def test_update_span_id_keeps_trace_and_collection(self):
        trace_context.set({"trace_id": "t" * 32, "span_id": "s" * 16, "collection": "recordings"})

        update_span_id("n" * 16)

        assert trace_context.get() == {"trace_id": "t" * 32, "span_id": "n" * 16, "collection": "recordings"}

    def test_collection_scope_restores_previous_state(self):
        before = {"trace_id": "t" * 32, "span_id": "s" * 16}
        trace_context.set(before)

        with collection_scope("exercises") as ctx:
            update_span_id("n" * 16)
            assert ctx["collection"] == "exercises"
            assert get_trace_context()["span_id"] == "n" * 16

        assert trace_context.get() == before


@pytest.mark.unit
class TestTracing:
    def test_create_span_records_attributes(self, span_exporter):
        with create_span("search.collection", attributes={"search.collection": "notes"}):
            pass

        (finished,) = span_exporter.get_finished_spans()
        assert finished.name == "search.collection"
        assert finished.attributes["search.collection"] == "notes"

    def test_create_span_updates_context_span_id(self, span_exporter):
        with create_span("search.collection") as span:
            expected = format(span.get_span_context().span_id, "016x")
            assert get_trace_context()["span_id"] == expected

    def test_create_span_marks_escaping_errors(self, span_exporter):
        with pytest.raises(RuntimeError), create_span("search.collection"):
            raise RuntimeError("boom")

        (finished,) = span_exporter.get_finished_spans()
        assert finished.status.status_code is StatusCode.ERROR
        assert finished.events[0].name == "exception"

    def test_record_search_outcome_success(self, span_exporter):
        result = SearchResult(items=[{"id": 1}], total_count=4)

        with create_span("search.collection") as span:
            record_search_outcome(span, result)

        (finished,) = span_exporter.get_finished_spans()
        assert finished.attributes["search.success"] is True
        assert finished.attributes["search.total_count"] == 4
        assert finished.attributes["search.returned"] == 1

    def test_record_search_outcome_handled_error(self, span_exporter):
        with create_span("search.collection") as span:
            record_search_outcome(span, None, ValueError("Unknown collection: videos"))

        (finished,) = span_exporter.get_finished_spans()
        assert finished.attributes["search.success"] is False
        assert finished.attributes["search.error_type"] == "ValueError"
        assert finished.status.status_code is StatusCode.ERROR


@pytest.mark.unit
class TestMetrics:
    def test_request_counter(self):
        labels = {"collection": "metrics-test", "status": "ok"}
        before = REGISTRY.get_sample_value("search_requests_total", labels) or 0.0

        SEARCH_REQUEST_COUNT.labels(**labels).inc()

        assert REGISTRY.get_sample_value("search_requests_total", labels) == before + 1

    def test_track_latency_observes_on_error(self):
        with pytest.raises(ValueError), track_latency(SEARCH_LATENCY, collection="latency-test"):
            raise ValueError("bad options")

        assert REGISTRY.get_sample_value("search_latency_seconds_count", {"collection": "latency-test"}) == 1.0
