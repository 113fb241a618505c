"""
TF-IDF vector store - the lexical memory engine.

Pattern: Protocol → In-process impl → Shared accessor

This module contains:
1. TfidfVectorStore - documents, inverted index, lazy TF-IDF, cosine search
2. get_vector_store() / reset_vector_store() - shared instance lifecycle

HOW A SEARCH WORKS:
-------------------
Mutations only touch the document map and the inverted index and flip the
dirty flag. The first search afterwards rebuilds every document's TF-IDF
vector in one pass, weighs the query against the same IDF table, narrows
candidates to documents sharing at least one query term, and ranks them by
cosine similarity. Nothing here raises on empty or unknown input; "no
relevant memory" is always an empty list.

The store does no locking. Callers on multiple threads must serialize
access themselves.
"""

from __future__ import annotations

import logging
from typing import Iterable

from lexical_memory.config import MemoryConfig, get_config
from lexical_memory.core import IndexStats, SearchResult
from lexical_memory.observability import attributes as attrs
from lexical_memory.observability.config import get_config as get_tracing_config
from lexical_memory.observability.tracer import SpanProtocol, TracerProtocol, get_tracer
from lexical_memory.retrieval.document import MemoryDocument
from lexical_memory.retrieval.index import InvertedIndex
from lexical_memory.retrieval.tfidf import build_vector, dot, magnitude
from lexical_memory.retrieval.tokenizer import tokenize

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# TF-IDF STORE
# ---------------------------------------------------------------------------


class TfidfVectorStore:
    """
    In-process TF-IDF vector store with cosine-similarity search.

    Implements the MemoryStore protocol. Adding a document with an id that
    is already stored replaces it (the old version is fully removed first).
    """

    def __init__(
        self,
        config: MemoryConfig | None = None,
        tracer: TracerProtocol | None = None,
    ):
        """
        Initialize an empty store.

        Args:
            config: Search defaults (global config if not provided)
            tracer: Tracer for rebuild/search spans (global tracer if not provided)
        """
        self.config = config or get_config()
        self._tracer = tracer
        self._documents: dict[str, MemoryDocument] = {}
        self._index = InvertedIndex()
        self._magnitudes: dict[str, float] = {}  # Valid only while not dirty
        self._dirty = True

    @property
    def tracer(self) -> TracerProtocol:
        return self._tracer or get_tracer()

    @property
    def size(self) -> int:
        """Current document count."""
        return len(self._documents)

    @property
    def index(self) -> InvertedIndex:
        """The inverted index (read it, don't mutate it)."""
        return self._index

    @property
    def is_dirty(self) -> bool:
        """True when TF-IDF vectors are stale."""
        return self._dirty

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._documents

    def get_document(self, doc_id: str) -> MemoryDocument | None:
        return self._documents.get(doc_id)

    # -----------------------------------------------------------------------
    # Index maintenance
    # -----------------------------------------------------------------------

    def add_document(self, doc: MemoryDocument) -> None:
        """Add a document, replacing any stored document with the same id."""
        if doc.id in self._documents:
            self.remove_document(doc.id)

        doc.tokens = tokenize(doc.content)
        doc.tfidf = None
        self._documents[doc.id] = doc
        self._index.add(doc.id, set(doc.tokens))
        self._dirty = True

        logger.debug(f"Indexed {doc.id} ({len(doc.tokens)} tokens)")

    def add_documents(self, docs: Iterable[MemoryDocument]) -> None:
        """Add documents one at a time; the rebuild still happens once."""
        for doc in docs:
            self.add_document(doc)

    def remove_document(self, doc_id: str) -> None:
        """Remove a document. Unknown ids are ignored."""
        doc = self._documents.pop(doc_id, None)
        if doc is None:
            return

        self._index.remove(doc_id, set(doc.tokens or ()))
        self._magnitudes.pop(doc_id, None)
        self._dirty = True

        logger.debug(f"Removed {doc_id}")

    def remove_conversation(self, conversation_id: str) -> None:
        """Remove every document belonging to a conversation."""
        doomed = [
            doc_id
            for doc_id, doc in self._documents.items()
            if doc.conversation_id == conversation_id
        ]
        for doc_id in doomed:
            self.remove_document(doc_id)

        if doomed:
            logger.debug(f"Removed {len(doomed)} documents of conversation {conversation_id}")

    def clear(self) -> None:
        """Drop all documents and index state."""
        self._documents.clear()
        self._index.clear()
        self._magnitudes.clear()
        self._dirty = True

    # -----------------------------------------------------------------------
    # TF-IDF
    # -----------------------------------------------------------------------

    def rebuild_tfidf(self) -> None:
        """Recompute every document vector if the corpus changed."""
        if not self._dirty:
            return

        n_docs = len(self._documents)
        with self.tracer.start_span(
            "memory.rebuild",
            attributes={attrs.MEMORY_DOCUMENT_COUNT: n_docs},
        ) as span:
            self._magnitudes.clear()
            for doc in self._documents.values():
                doc.tfidf = build_vector(doc.tokens or [], n_docs, self._index.doc_freq)
                self._magnitudes[doc.id] = magnitude(doc.tfidf)
            self._dirty = False
            span.set_attribute(attrs.MEMORY_TERM_COUNT, len(self._index))
            span.set_status("ok")

        logger.debug(f"Rebuilt TF-IDF for {n_docs} documents, {len(self._index)} terms")

    # -----------------------------------------------------------------------
    # Search
    # -----------------------------------------------------------------------

    def search(
        self,
        query: str,
        top_k: int | None = None,
        min_score: float | None = None,
        exclude_conversation_id: str | None = None,
    ) -> list[SearchResult]:
        """
        Rank stored documents by cosine similarity to the query.

        Args:
            query: Natural-language query
            top_k: Maximum number of results (config default if None)
            min_score: Minimum score to keep (config default if None)
            exclude_conversation_id: Skip documents of this conversation

        Returns:
            Up to top_k results, score descending, newer first on ties.
            Empty when nothing matches.
        """
        top_k = self.config.default_top_k if top_k is None else top_k
        min_score = self.config.default_min_score if min_score is None else min_score

        self.rebuild_tfidf()

        n_docs = len(self._documents)
        capture = get_tracing_config().capture_query
        with self.tracer.start_span(
            "memory.search",
            attributes=attrs.search_request_attributes(
                top_k=top_k,
                min_score=min_score,
                document_count=n_docs,
                query=query if capture else None,
            ),
        ) as span:
            results = self._score(query, top_k, min_score, exclude_conversation_id, span)
            span.set_attribute(attrs.MEMORY_RESULT_COUNT, len(results))
            if results:
                span.set_attribute(attrs.MEMORY_TOP_SCORE, results[0].score)
            span.set_status("ok")

        logger.debug(f"Search returned {len(results)} of {n_docs} documents")
        return results

    def _score(
        self,
        query: str,
        top_k: int,
        min_score: float,
        exclude_conversation_id: str | None,
        span: SpanProtocol,
    ) -> list[SearchResult]:
        n_docs = len(self._documents)
        if n_docs == 0 or top_k <= 0:
            return []

        query_tokens = tokenize(query)
        span.set_attribute(attrs.MEMORY_QUERY_TERM_COUNT, len(query_tokens))
        if not query_tokens:
            return []

        # Unseen query terms can't match anything
        query_vec = build_vector(query_tokens, n_docs, self._index.doc_freq, skip_unseen=True)
        if not query_vec:
            return []

        query_mag = magnitude(query_vec)
        if query_mag == 0:
            return []

        # Full union of postings, no early cutoff
        candidate_ids = self._index.candidates(query_vec)
        span.set_attribute(attrs.MEMORY_CANDIDATE_COUNT, len(candidate_ids))

        results: list[SearchResult] = []
        for doc_id in candidate_ids:
            doc = self._documents.get(doc_id)
            if doc is None or not doc.tfidf:
                continue
            if exclude_conversation_id is not None and doc.conversation_id == exclude_conversation_id:
                continue

            doc_mag = self._magnitudes.get(doc_id, 0.0)
            if doc_mag == 0:
                continue

            score = dot(doc.tfidf, query_vec) / (query_mag * doc_mag)
            if score >= min_score:
                results.append(SearchResult(document=doc, score=score))

        results.sort(key=lambda r: (r.score, r.document.timestamp), reverse=True)
        return results[:top_k]

    def get_stats(self) -> IndexStats:
        """Document and distinct-term counts."""
        return IndexStats(
            document_count=len(self._documents),
            term_count=len(self._index),
        )


# ---------------------------------------------------------------------------
# SHARED INSTANCE
# ---------------------------------------------------------------------------


_store: TfidfVectorStore | None = None


def get_vector_store() -> TfidfVectorStore:
    """
    Get the shared store, creating it on first use.

    The embedding application should call reset_vector_store() at session
    or authentication boundaries so memory never leaks across users.
    """
    global _store
    if _store is None:
        _store = TfidfVectorStore()
        logger.info("Created shared memory store")
    return _store


def reset_vector_store() -> None:
    """Clear and drop the shared store; the next accessor call starts fresh."""
    global _store
    if _store is not None:
        _store.clear()
        logger.info("Reset shared memory store")
    _store = None
