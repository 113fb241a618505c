"""
Search Defaults Configuration

Loads retrieval defaults from environment variables. Bad values fall back
to the defaults so a misconfigured environment never breaks retrieval.
"""

import logging
import math
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5
DEFAULT_MIN_SCORE = 0.05


def _env_number(name: str, default, cast):
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw)
    except ValueError:
        value = None
    if value is None or not math.isfinite(value):
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    return value


@dataclass
class MemoryConfig:
    """Default search parameters.

    Environment Variables:
        MEMORY_TOP_K: Maximum hits returned by search (default: 5)
        MEMORY_MIN_SCORE: Minimum cosine score for a hit (default: 0.05)
    """

    default_top_k: int = DEFAULT_TOP_K
    default_min_score: float = DEFAULT_MIN_SCORE

    @classmethod
    def from_env(cls) -> "MemoryConfig":
        """Load config from environment variables."""
        return cls(
            default_top_k=_env_number("MEMORY_TOP_K", DEFAULT_TOP_K, int),
            default_min_score=_env_number("MEMORY_MIN_SCORE", DEFAULT_MIN_SCORE, float),
        )


# Global config singleton
_config: MemoryConfig | None = None


def get_config() -> MemoryConfig:
    """Get the global memory config (lazy-loaded from env)."""
    global _config
    if _config is None:
        _config = MemoryConfig.from_env()
    return _config


def reset_config() -> None:
    """Reset config (useful for testing)."""
    global _config
    _config = None
