"""Chunk repository port."""

from typing import Protocol
from uuid import UUID

from blogsearch.application.dto.search_dto import ChunkCandidate
from blogsearch.domain.entities import Chunk


class ChunkRepository(Protocol):
    """Port for chunk persistence and nearest-neighbour lookup."""

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]: ...

    async def delete_by_document_id(self, document_id: UUID) -> None: ...

    async def get_by_document_id(self, document_id: UUID) -> list[Chunk]: ...

    async def count_by_document_id(self, document_id: UUID) -> int: ...

    async def search_candidates(
        self, query_embedding: list[float], limit: int
    ) -> list[ChunkCandidate]: ...
