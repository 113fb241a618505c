"""
Memory Boundary Schemas

These Pydantic models are the contract between the memory index and the
rest of the chat application: records coming in to be indexed, hits and
stats going out (e.g. to a status panel or a prompt builder).

The store itself works on plain dataclasses; validation happens here,
once, at the boundary.
"""

from pydantic import BaseModel, Field

from lexical_memory.core import IndexStats, SearchResult
from lexical_memory.retrieval.document import MemoryDocument


class MemoryRecord(BaseModel):
    """
    A snippet the application wants indexed.

    Typically one chat message: id is usually "<conversation>::<message>".
    """

    id: str = Field(
        min_length=1,
        description="Unique document id within the store",
    )

    conversation_id: str = Field(
        description="Conversation the snippet belongs to (bulk-removal key)"
    )

    conversation_title: str = Field(
        default="",
        description="Display title of the conversation",
    )

    content: str = Field(
        description="Raw text to index"
    )

    timestamp: float = Field(
        description="Ordering key; newer snippets win score ties"
    )

    role: str = Field(
        default="user",
        description="Message role (user, assistant, document, ...)",
    )

    def to_document(self) -> MemoryDocument:
        return MemoryDocument(
            id=self.id,
            conversation_id=self.conversation_id,
            conversation_title=self.conversation_title,
            content=self.content,
            timestamp=self.timestamp,
            role=self.role,
        )


class MemoryHit(BaseModel):
    """One ranked search hit."""

    id: str
    conversation_id: str
    conversation_title: str
    role: str
    timestamp: float
    content: str
    score: float = Field(
        ge=0.0,
        description="Cosine similarity to the query (0-1, float error aside)",
    )

    @classmethod
    def from_result(cls, result: SearchResult) -> "MemoryHit":
        return cls(**result.document.to_dict(), score=result.score)


class IndexStatsSummary(BaseModel):
    """Index size as reported to the application."""

    document_count: int = Field(ge=0)
    term_count: int = Field(ge=0)

    @classmethod
    def from_stats(cls, stats: IndexStats) -> "IndexStatsSummary":
        return cls(document_count=stats.document_count, term_count=stats.term_count)
