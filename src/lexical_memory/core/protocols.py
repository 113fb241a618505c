"""
Core protocols defining contracts for the memory index.

PATTERN:
- Protocol defines the contract
- TfidfVectorStore implements it
- Accessor functions hand out the shared instance
- Tests exercise the store through this surface
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lexical_memory.retrieval.document import MemoryDocument


# ---------------------------------------------------------------------------
# RESULT TYPES
# ---------------------------------------------------------------------------

@dataclass
class SearchResult:
    """A retrieved document with its cosine similarity to the query."""
    document: MemoryDocument
    score: float


@dataclass
class IndexStats:
    """Size of the index, for debugging and status displays."""
    document_count: int
    term_count: int


# ---------------------------------------------------------------------------
# MEMORY STORE PROTOCOL
# ---------------------------------------------------------------------------

@runtime_checkable
class MemoryStore(Protocol):
    """
    Contract for lexical memory retrieval.

    Implementations:
    - TfidfVectorStore (in-process TF-IDF + cosine)

    Absent ids and empty inputs are never errors: mutations become
    no-ops and searches return an empty list.
    """

    @property
    def size(self) -> int:
        """Number of stored documents."""
        ...

    def add_document(self, doc: MemoryDocument) -> None:
        """Add or replace a document."""
        ...

    def add_documents(self, docs: Iterable[MemoryDocument]) -> None:
        """Add documents one at a time."""
        ...

    def remove_document(self, doc_id: str) -> None:
        """Remove a document by id."""
        ...

    def remove_conversation(self, conversation_id: str) -> None:
        """Remove every document of a conversation."""
        ...

    def clear(self) -> None:
        """Drop all documents and index state."""
        ...

    def search(
        self,
        query: str,
        top_k: int | None = None,
        min_score: float | None = None,
        exclude_conversation_id: str | None = None,
    ) -> list[SearchResult]:
        """Rank stored documents against a query."""
        ...

    def get_stats(self) -> IndexStats:
        """Document and term counts."""
        ...
