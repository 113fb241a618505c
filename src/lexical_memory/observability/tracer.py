"""
Span sources for index and search instrumentation.

get_tracer() hands out an OTel-backed tracer once init_tracing() has
installed a provider, and a NoOpTracer otherwise, so the store can always
open spans without checking whether tracing is on.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Protocol


class SpanProtocol(Protocol):
    """What the store does with an open span."""

    def set_attribute(self, key: str, value: Any) -> None:
        ...

    def set_status(self, status: str, description: str | None = None) -> None:
        """status is "ok" or "error"."""
        ...


class TracerProtocol(Protocol):
    """Opens spans as context managers."""

    @contextmanager
    def start_span(self, name: str, attributes: dict[str, Any] | None = None) -> Iterator[SpanProtocol]:
        ...


# ---------------------------------------------------------------------------
# DISABLED TRACING
# ---------------------------------------------------------------------------


class NoOpSpan:
    """Span that records nothing."""

    def set_attribute(self, key: str, value: Any) -> None:
        pass

    def set_status(self, status: str, description: str | None = None) -> None:
        pass


class NoOpTracer:
    """Tracer whose spans record nothing."""

    @contextmanager
    def start_span(self, name: str, attributes: dict[str, Any] | None = None) -> Iterator[NoOpSpan]:
        yield NoOpSpan()


# ---------------------------------------------------------------------------
# OPENTELEMETRY ADAPTERS
# ---------------------------------------------------------------------------


class OTelSpan:
    """Adapts an OTel span to SpanProtocol."""

    def __init__(self, span: Any):
        self._span = span

    def set_attribute(self, key: str, value: Any) -> None:
        self._span.set_attribute(key, value)

    def set_status(self, status: str, description: str | None = None) -> None:
        from opentelemetry.trace import Status, StatusCode

        if status == "ok":
            # OTel ignores descriptions on OK statuses
            self._span.set_status(Status(StatusCode.OK))
        else:
            self._span.set_status(Status(StatusCode.ERROR, description))


class OTelTracer:
    """Adapts an OTel tracer to TracerProtocol."""

    def __init__(self, tracer: Any):
        self._tracer = tracer

    @contextmanager
    def start_span(self, name: str, attributes: dict[str, Any] | None = None) -> Iterator[OTelSpan]:
        with self._tracer.start_as_current_span(name, attributes=attributes) as span:
            yield OTelSpan(span)


# ---------------------------------------------------------------------------
# FACTORY
# ---------------------------------------------------------------------------


_tracer: TracerProtocol | None = None
_provider: Any = None
_service_name: str | None = None


def install_provider(provider: Any, service_name: str) -> None:
    """Route get_tracer() to provider; called by init_tracing()."""
    global _provider, _service_name
    _provider = provider
    _service_name = service_name
    reset_tracer()


def uninstall_provider() -> Any:
    """Forget the installed provider and return it (None if there was none)."""
    global _provider, _service_name
    provider, _provider, _service_name = _provider, None, None
    reset_tracer()
    return provider


def get_tracer() -> TracerProtocol:
    """
    Get the shared tracer.

    Order of preference: the provider installed by init_tracing(), a global
    OTel SDK provider when MEMORY_TRACING_ENABLED is set, then NoOpTracer.
    """
    global _tracer
    if _tracer is not None:
        return _tracer

    if _provider is not None:
        _tracer = OTelTracer(_provider.get_tracer(_service_name))
        return _tracer

    from lexical_memory.observability.config import get_config

    config = get_config()
    _tracer = NoOpTracer()
    if not config.enabled:
        return _tracer

    try:
        from opentelemetry import trace
        from opentelemetry.sdk.trace import TracerProvider
    except ImportError:
        return _tracer

    if isinstance(trace.get_tracer_provider(), TracerProvider):
        _tracer = OTelTracer(trace.get_tracer(config.service_name))
    return _tracer


def reset_tracer() -> None:
    """Drop the cached tracer (useful for testing)."""
    global _tracer
    _tracer = None
