"""
Document model for the lexical memory index.

Single responsibility: Define the structure of snippets
stored in the TF-IDF vector store.

"""

from dataclasses import dataclass


@dataclass
class MemoryDocument:
    """
    One indexable text snippet.

    The conversation fields are opaque caller metadata; only
    conversation_id is read by the store (bulk removal, exclusion).
    tokens and tfidf are derived by the store and should not be set
    by callers.
    """
    id: str
    conversation_id: str
    conversation_title: str
    content: str
    timestamp: float
    role: str
    tokens: list[str] | None = None
    tfidf: dict[str, float] | None = None  # Stale until the next rebuild

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "conversation_id": self.conversation_id,
            "conversation_title": self.conversation_title,
            "content": self.content,
            "timestamp": self.timestamp,
            "role": self.role,
        }
