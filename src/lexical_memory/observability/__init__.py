"""
Observability Module - OpenTelemetry Integration

Optional tracing for index rebuilds and searches. Everything degrades to
no-ops when tracing is disabled or OpenTelemetry is not installed.

USAGE:
------
# At application startup:
from lexical_memory.observability import init_tracing

init_tracing()  # Installs a TracerProvider if MEMORY_TRACING_ENABLED=true

# The store picks the tracer up on its own:
from lexical_memory.observability import get_tracer

tracer = get_tracer()
with tracer.start_span("memory.search", attributes={"memory.search.top_k": 5}) as span:
    span.set_attribute("memory.search.result_count", 3)
"""

from __future__ import annotations

import logging
from typing import Any

from lexical_memory.observability.config import (
    TracingConfig,
    get_config,
    reset_config,
)
from lexical_memory.observability.tracer import (
    TracerProtocol,
    SpanProtocol,
    NoOpTracer,
    NoOpSpan,
    get_tracer,
    install_provider,
    reset_tracer,
    uninstall_provider,
)
from lexical_memory.observability.attributes import (
    MEMORY_DOCUMENT_COUNT,
    MEMORY_TERM_COUNT,
    MEMORY_QUERY,
    MEMORY_QUERY_TERM_COUNT,
    MEMORY_TOP_K,
    MEMORY_MIN_SCORE,
    MEMORY_CANDIDATE_COUNT,
    MEMORY_RESULT_COUNT,
    MEMORY_TOP_SCORE,
    search_request_attributes,
)

logger = logging.getLogger(__name__)

_tracing_initialized = False


def init_tracing(
    config: TracingConfig | None = None,
    exporter: Any = None,
) -> bool:
    """
    Initialize OpenTelemetry tracing.

    This should be called once at application startup.

    Args:
        config: Optional config (uses env vars if not provided)
        exporter: Span exporter to use instead of the OTLP/console one

    Returns:
        True if tracing was initialized, False if disabled or failed
    """
    global _tracing_initialized
    if _tracing_initialized:
        return True

    config = config or get_config()

    if not config.enabled:
        logger.debug("Memory tracing disabled")
        return False

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import (
            BatchSpanProcessor,
            ConsoleSpanExporter,
        )

        if exporter is not None:
            logger.info(f"Memory tracing exporting to {type(exporter).__name__}")
        elif config.endpoint:
            from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
            exporter = OTLPSpanExporter(endpoint=config.endpoint)
            logger.info(f"Memory tracing exporting to: {config.endpoint}")
        else:
            exporter = ConsoleSpanExporter()
            logger.info("Memory tracing exporting to console")

        provider = TracerProvider(
            resource=Resource.create({"service.name": config.service_name})
        )
        provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        install_provider(provider, config.service_name)

        _tracing_initialized = True
        return True

    except ImportError as e:
        logger.warning(f"OpenTelemetry not installed, tracing disabled: {e}")
        return False
    except Exception as e:
        logger.error(f"Failed to initialize tracing: {e}")
        return False


def shutdown_tracing() -> None:
    """Flush spans and reset tracing state."""
    global _tracing_initialized

    if not _tracing_initialized:
        return

    provider = uninstall_provider()
    try:
        if provider is not None:
            provider.shutdown()
    except Exception as e:
        logger.warning(f"Error shutting down tracing: {e}")

    reset_config()
    _tracing_initialized = False


__all__ = [
    # Initialization
    "init_tracing",
    "shutdown_tracing",
    # Config
    "TracingConfig",
    "get_config",
    "reset_config",
    # Tracer
    "TracerProtocol",
    "SpanProtocol",
    "NoOpTracer",
    "NoOpSpan",
    "get_tracer",
    "reset_tracer",
    # Attributes
    "MEMORY_DOCUMENT_COUNT",
    "MEMORY_TERM_COUNT",
    "MEMORY_QUERY",
    "MEMORY_QUERY_TERM_COUNT",
    "MEMORY_TOP_K",
    "MEMORY_MIN_SCORE",
    "MEMORY_CANDIDATE_COUNT",
    "MEMORY_RESULT_COUNT",
    "MEMORY_TOP_SCORE",
    "search_request_attributes",
]
