"""
Inverted index with document-frequency bookkeeping.

Maps each term to the set of document ids containing it and keeps a
per-term document frequency equal to the size of that set. Terms whose
frequency drops to zero are purged from both tables.
"""

from __future__ import annotations

from typing import Iterable


class InvertedIndex:
    """
    term -> posting set, plus term -> document frequency.

    Callers pass the UNIQUE terms of a document; repeated terms must not
    be counted twice.
    """

    def __init__(self) -> None:
        self._postings: dict[str, set[str]] = {}
        self._doc_freq: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._postings)

    def __contains__(self, term: object) -> bool:
        return term in self._postings

    def add(self, doc_id: str, terms: Iterable[str]) -> None:
        """Register doc_id under every term."""
        for term in terms:
            postings = self._postings.setdefault(term, set())
            before = len(postings)
            postings.add(doc_id)
            if len(postings) > before:
                self._doc_freq[term] = self._doc_freq.get(term, 0) + 1

    def remove(self, doc_id: str, terms: Iterable[str]) -> None:
        """Unregister doc_id from every term, purging terms that reach zero."""
        for term in terms:
            postings = self._postings.get(term)
            if postings is None or doc_id not in postings:
                continue
            postings.discard(doc_id)
            freq = self._doc_freq.get(term, 1) - 1
            if freq <= 0:
                del self._postings[term]
                self._doc_freq.pop(term, None)
            else:
                self._doc_freq[term] = freq

    def clear(self) -> None:
        self._postings.clear()
        self._doc_freq.clear()

    def doc_freq(self, term: str) -> int:
        """Number of documents containing term (0 if unknown)."""
        return self._doc_freq.get(term, 0)

    def postings(self, term: str) -> frozenset[str]:
        """Ids of documents containing term."""
        return frozenset(self._postings.get(term, ()))

    def candidates(self, terms: Iterable[str]) -> set[str]:
        """Union of the posting sets of all given terms."""
        ids: set[str] = set()
        for term in terms:
            postings = self._postings.get(term)
            if postings:
                ids.update(postings)
        return ids
