"""Search DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from blogsearch.domain.entities import Chunk, Document

MIN_SEARCH_LIMIT = 1
MAX_SEARCH_LIMIT = 100


@dataclass
class SearchInput:
    """Input for semantic search."""

    query: str
    limit: int = 10


@dataclass
class ChunkCandidate:
    """A stored chunk together with the document that owns it."""

    document: Document
    chunk: Chunk


@dataclass
class SearchResult:
    """Best-matching chunk of one document."""

    document_id: UUID
    title: str
    content: str
    matched_chunk_text: str
    matched_chunk_index: int
    matched_chunk_start: int
    matched_chunk_end: int
    similarity: float
    created_at: datetime
    updated_at: datetime
