"""
Unit Tests for Observability Module

Tests the OpenTelemetry integration with focus on:
1. Graceful degradation (NoOpTracer when disabled)
2. Configuration loading from environment
3. Span attribute helpers

The export test needs the OpenTelemetry SDK and is skipped without it;
everything else runs WITHOUT OpenTelemetry installed.
"""

import pytest
from unittest.mock import patch

import lexical_memory.observability as observability
from lexical_memory.config import MemoryConfig
from lexical_memory.observability import init_tracing, shutdown_tracing
from lexical_memory.retrieval.document import MemoryDocument
from lexical_memory.retrieval.store import TfidfVectorStore
from lexical_memory.observability.config import (
    TracingConfig,
    get_config,
    reset_config,
)
from lexical_memory.observability.tracer import (
    NoOpTracer,
    NoOpSpan,
    OTelTracer,
    get_tracer,
    reset_tracer,
)
from lexical_memory.observability.attributes import (
    MEMORY_DOCUMENT_COUNT,
    MEMORY_MIN_SCORE,
    MEMORY_QUERY,
    MEMORY_RESULT_COUNT,
    MEMORY_TOP_K,
    search_request_attributes,
)


# ---------------------------------------------------------------------------
# CONFIG TESTS
# ---------------------------------------------------------------------------


class TestTracingConfig:
    """Test configuration loading."""

    def setup_method(self):
        reset_config()

    def teardown_method(self):
        reset_config()

    def test_config_defaults(self):
        """Config should have privacy-safe defaults when env vars not set."""
        with patch.dict("os.environ", {}, clear=True):
            config = TracingConfig.from_env()

            assert config.enabled is False
            assert config.service_name == "lexical-memory"
            assert config.endpoint is None
            assert config.capture_query is False

    def test_config_enabled_values(self):
        for value in ("true", "1", "yes", "TRUE"):
            with patch.dict("os.environ", {"MEMORY_TRACING_ENABLED": value}):
                assert TracingConfig.from_env().enabled is True

    def test_config_disabled_values(self):
        for value in ("false", "0", "no"):
            with patch.dict("os.environ", {"MEMORY_TRACING_ENABLED": value}):
                assert TracingConfig.from_env().enabled is False

    def test_config_endpoint(self):
        with patch.dict(
            "os.environ",
            {"MEMORY_TRACING_ENDPOINT": "https://otel.example.com/v1/traces"},
        ):
            config = TracingConfig.from_env()
            assert config.endpoint == "https://otel.example.com/v1/traces"

    def test_get_config_singleton(self):
        assert get_config() is get_config()


# ---------------------------------------------------------------------------
# NOOP TRACER TESTS
# ---------------------------------------------------------------------------


class TestNoOpTracer:
    """Test NoOpTracer for graceful degradation."""

    def test_noop_tracer_creates_spans(self):
        with NoOpTracer().start_span("memory.search") as span:
            assert isinstance(span, NoOpSpan)

    def test_noop_span_accepts_calls(self):
        with NoOpTracer().start_span("memory.search", attributes={"k": 1}) as span:
            span.set_attribute("memory.search.result_count", 3)
            span.set_status("ok")
            span.set_status("error", "Something went wrong")


# ---------------------------------------------------------------------------
# FACTORY / INIT TESTS
# ---------------------------------------------------------------------------


class TestGetTracer:
    """Test the get_tracer factory function."""

    def setup_method(self):
        reset_tracer()
        reset_config()

    def teardown_method(self):
        reset_tracer()
        reset_config()

    def test_get_tracer_returns_noop_when_disabled(self):
        with patch.dict("os.environ", {"MEMORY_TRACING_ENABLED": "false"}):
            assert isinstance(get_tracer(), NoOpTracer)

    def test_get_tracer_singleton(self):
        with patch.dict("os.environ", {"MEMORY_TRACING_ENABLED": "false"}):
            assert get_tracer() is get_tracer()

    def test_get_tracer_when_enabled_has_start_span(self):
        """OTelTracer if OTel is set up, NoOpTracer otherwise."""
        with patch.dict("os.environ", {"MEMORY_TRACING_ENABLED": "true"}):
            tracer = get_tracer()
            assert callable(tracer.start_span)

    def test_init_tracing_disabled(self):
        assert init_tracing(TracingConfig(enabled=False)) is False


# ---------------------------------------------------------------------------
# ATTRIBUTE HELPER TESTS
# ---------------------------------------------------------------------------


class TestAttributeHelpers:
    """Test attribute helper functions."""

    def test_search_request_attributes(self):
        attrs = search_request_attributes(top_k=5, min_score=0.05, document_count=42)

        assert attrs[MEMORY_TOP_K] == 5
        assert attrs[MEMORY_MIN_SCORE] == 0.05
        assert attrs[MEMORY_DOCUMENT_COUNT] == 42
        assert MEMORY_QUERY not in attrs

    def test_search_request_attributes_with_query(self):
        attrs = search_request_attributes(
            top_k=5, min_score=0.05, document_count=1, query="cat"
        )
        assert attrs[MEMORY_QUERY] == "cat"


# ---------------------------------------------------------------------------
# OPENTELEMETRY EXPORT TESTS
# ---------------------------------------------------------------------------


class TestOTelExport:
    """Test real spans flowing through an installed SDK provider."""

    def setup_method(self):
        reset_tracer()
        reset_config()

    def teardown_method(self):
        shutdown_tracing()
        reset_tracer()
        reset_config()

    def test_search_span_exported_and_shutdown_resets(self):
        pytest.importorskip("opentelemetry.sdk")
        from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
        from opentelemetry.trace import StatusCode

        exporter = InMemorySpanExporter()
        # Keep the process-wide OTel provider untouched
        with patch("opentelemetry.trace.set_tracer_provider"):
            assert init_tracing(TracingConfig(enabled=True), exporter=exporter) is True

        assert isinstance(get_tracer(), OTelTracer)

        store = TfidfVectorStore(config=MemoryConfig())
        store.add_document(MemoryDocument(
            id="d1",
            conversation_id="conv-1",
            conversation_title="Pets",
            content="The cat sat on the mat",
            timestamp=1,
            role="user",
        ))
        assert len(store.search("cat")) == 1

        shutdown_tracing()

        spans = {span.name: span for span in exporter.get_finished_spans()}
        search_span = spans["memory.search"]
        assert search_span.attributes[MEMORY_RESULT_COUNT] == 1
        assert search_span.attributes[MEMORY_TOP_K] == 5
        assert search_span.status.status_code == StatusCode.OK
        assert spans["memory.rebuild"].status.status_code == StatusCode.OK

        assert observability._tracing_initialized is False
        with patch.dict("os.environ", {"MEMORY_TRACING_ENABLED": "false"}):
            reset_config()
            assert isinstance(get_tracer(), NoOpTracer)
