"""Repository ports."""

from blogsearch.application.ports.repositories.chunk_repository import ChunkRepository
from blogsearch.application.ports.repositories.document_repository import (
    DocumentRepository,
)

__all__ = [
    "ChunkRepository",
    "DocumentRepository",
]
