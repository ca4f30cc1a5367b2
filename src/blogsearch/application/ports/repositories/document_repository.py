"""Document repository port."""

from typing import Protocol
from uuid import UUID

from blogsearch.domain.entities import Document


class DocumentRepository(Protocol):
    """Port for document persistence."""

    async def create_batch(self, documents: list[Document]) -> list[Document]: ...

    async def get_by_id(self, document_id: UUID) -> Document | None: ...

    async def list_all(self) -> list[Document]: ...

    async def list_duplicate_groups(self) -> list[list[Document]]: ...

    async def touch(self, document: Document) -> Document: ...

    async def delete(self, document_id: UUID) -> bool: ...
