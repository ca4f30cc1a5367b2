"""Chunk entity - text segment with embedding."""

from dataclasses import dataclass
from uuid import UUID

from blogsearch.domain.value_objects import ChunkKind


@dataclass
class Chunk:
    """Chunk - span of a document's text with its vector embedding.

    Offsets point into the normalized ``title + "\\n\\n" + content`` text.
    """

    id: UUID
    document_id: UUID
    chunk_index: int
    content: str
    start_index: int
    end_index: int
    embedding: list[float]
    kind: ChunkKind = ChunkKind.BODY
