"""
OpenTelemetry Configuration

Loads tracing settings from environment variables.
Supports graceful degradation when OpenTelemetry is not installed.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "false").lower() in ("true", "1", "yes")


@dataclass
class TracingConfig:
    """Configuration for memory index tracing.

    Environment Variables:
        MEMORY_TRACING_ENABLED: Enable tracing (default: false)
        MEMORY_TRACING_SERVICE_NAME: Service name on spans (default: lexical-memory)
        MEMORY_TRACING_ENDPOINT: OTLP HTTP endpoint (optional, console if empty)
        MEMORY_TRACING_CAPTURE_QUERY: Record query text on spans (default: false)

    PRIVACY WARNING:
        Queries are built from users' chat messages. Setting
        MEMORY_TRACING_CAPTURE_QUERY=true exports that text to the
        configured exporter. Only enable it in controlled environments.
    """

    enabled: bool = False
    service_name: str = "lexical-memory"
    endpoint: str | None = None
    capture_query: bool = False

    @classmethod
    def from_env(cls) -> "TracingConfig":
        """Load config from environment variables."""
        return cls(
            enabled=_env_flag("MEMORY_TRACING_ENABLED"),
            service_name=os.environ.get("MEMORY_TRACING_SERVICE_NAME", "lexical-memory"),
            endpoint=os.environ.get("MEMORY_TRACING_ENDPOINT") or None,
            capture_query=_env_flag("MEMORY_TRACING_CAPTURE_QUERY"),
        )


# Global config singleton
_config: TracingConfig | None = None


def get_config() -> TracingConfig:
    """Get the global tracing config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = TracingConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
