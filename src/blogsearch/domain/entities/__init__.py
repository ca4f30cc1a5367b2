"""Domain entities."""

from blogsearch.domain.entities.chunk import Chunk
from blogsearch.domain.entities.document import Document

__all__ = [
    "Chunk",
    "Document",
]
