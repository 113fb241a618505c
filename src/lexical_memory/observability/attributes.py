"""
Span Attribute Keys

Custom memory.* namespace for index and search spans.
"""

# ---------------------------------------------------------------------------
# MEMORY NAMESPACE (custom)
# ---------------------------------------------------------------------------

# Corpus
MEMORY_DOCUMENT_COUNT = "memory.document_count"
MEMORY_TERM_COUNT = "memory.term_count"

# Search request
MEMORY_QUERY = "memory.query"  # only when MEMORY_TRACING_CAPTURE_QUERY=true
MEMORY_QUERY_TERM_COUNT = "memory.query.term_count"
MEMORY_TOP_K = "memory.search.top_k"
MEMORY_MIN_SCORE = "memory.search.min_score"

# Search outcome
MEMORY_CANDIDATE_COUNT = "memory.search.candidate_count"
MEMORY_RESULT_COUNT = "memory.search.result_count"
MEMORY_TOP_SCORE = "memory.search.top_score"


# ---------------------------------------------------------------------------
# HELPER FUNCTIONS
# ---------------------------------------------------------------------------


def search_request_attributes(
    top_k: int,
    min_score: float,
    document_count: int,
    query: str | None = None,
) -> dict:
    """Create attributes dict for a search span."""
    attrs = {
        MEMORY_TOP_K: top_k,
        MEMORY_MIN_SCORE: min_score,
        MEMORY_DOCUMENT_COUNT: document_count,
    }
    if query is not None:
        attrs[MEMORY_QUERY] = query
    return attrs
