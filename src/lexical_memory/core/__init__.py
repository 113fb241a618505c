"""
Core module - shared protocols and types for the memory index.

USAGE:
------
from lexical_memory.core import MemoryStore, SearchResult

def inject_context(store: MemoryStore, query: str) -> list[SearchResult]:
    return store.search(query)
"""

from lexical_memory.core.protocols import (
    # Protocols
    MemoryStore,
    # Data classes
    SearchResult,
    IndexStats,
)

__all__ = [
    # Protocols
    "MemoryStore",
    # Data classes
    "SearchResult",
    "IndexStats",
]
