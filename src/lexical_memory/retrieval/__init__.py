"""
Retrieval module - lexical similarity search for chat memory.

This module provides:
- MemoryDocument: The document model
- tokenize(): Text normalization
- InvertedIndex: term -> document ids, with document frequencies
- TfidfVectorStore: TF-IDF + cosine search over stored snippets
- get_vector_store() / reset_vector_store(): Shared instance lifecycle

ARCHITECTURE:
-------------
1. Protocol defines the contract (in core.protocols)
2. TfidfVectorStore implements it with no external services
3. Accessor functions own the shared instance
"""

# Document model
from lexical_memory.retrieval.document import MemoryDocument

# Building blocks
from lexical_memory.retrieval.tokenizer import STOP_WORDS, tokenize
from lexical_memory.retrieval.index import InvertedIndex

# Store and lifecycle
from lexical_memory.retrieval.store import (
    TfidfVectorStore,
    get_vector_store,
    reset_vector_store,
)

__all__ = [
    # Document
    "MemoryDocument",
    # Building blocks
    "STOP_WORDS",
    "tokenize",
    "InvertedIndex",
    # Store
    "TfidfVectorStore",
    "get_vector_store",
    "reset_vector_store",
]
