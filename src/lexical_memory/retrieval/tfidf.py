"""
TF-IDF weighting and sparse vector math.

Vectors are plain dicts (term -> weight). With the smoothed IDF below every
weight is strictly positive, so cosine scores fall in [0, 1].
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Callable

import numpy as np

SparseVector = dict[str, float]


def smoothed_idf(n_docs: int, doc_freq: int) -> float:
    """ln((N + 1) / (df + 1)) + 1 - always > 0."""
    return math.log((n_docs + 1) / (doc_freq + 1)) + 1


def term_frequencies(tokens: list[str]) -> dict[str, float]:
    """Count of each term divided by the token count."""
    if not tokens:
        return {}
    total = len(tokens)
    return {term: count / total for term, count in Counter(tokens).items()}


def build_vector(
    tokens: list[str],
    n_docs: int,
    doc_freq: Callable[[str], int],
    skip_unseen: bool = False,
) -> SparseVector:
    """
    Weight a token sequence against the corpus.

    Args:
        tokens: Normalized terms (repeats count toward tf)
        n_docs: Current corpus size
        doc_freq: Lookup for a term's document frequency
        skip_unseen: Drop terms with zero document frequency (query side)

    Returns:
        Sparse term -> tf * idf mapping
    """
    vector: SparseVector = {}
    for term, tf in term_frequencies(tokens).items():
        df = doc_freq(term)
        if df == 0:
            if skip_unseen:
                continue
            # Document terms are always indexed; treat a miss as a singleton
            df = 1
        vector[term] = tf * smoothed_idf(n_docs, df)
    return vector


def magnitude(vector: SparseVector) -> float:
    """L2 norm of a sparse vector."""
    if not vector:
        return 0.0
    return float(np.linalg.norm(np.fromiter(vector.values(), dtype=float)))


def dot(a: SparseVector, b: SparseVector) -> float:
    """Dot product over the overlapping terms."""
    if len(a) > len(b):
        a, b = b, a
    return sum(weight * b[term] for term, weight in a.items() if term in b)
