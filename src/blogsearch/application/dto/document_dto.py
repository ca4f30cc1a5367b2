"""Document DTOs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from blogsearch.domain.entities import Document


@dataclass
class DocumentCreateInput:
    """Input for creating a document."""

    title: str
    content: str


@dataclass
class DocumentOutput:
    """Output DTO for document."""

    id: UUID
    title: str
    content: str
    created_at: datetime
    updated_at: datetime
    chunk_count: int | None = None

    @classmethod
    def from_entity(cls, document: Document, chunk_count: int | None = None) -> "DocumentOutput":
        return cls(
            id=document.id,
            title=document.title,
            content=document.content,
            created_at=document.created_at,
            updated_at=document.updated_at,
            chunk_count=chunk_count,
        )


@dataclass
class IngestResult:
    """Per-document outcome of an ingestion call."""

    document: DocumentOutput
    chunk_count: int


@dataclass
class DuplicateCleanupResult:
    """Outcome of removing documents that share a title."""

    groups: int
    kept_ids: list[UUID]
    deleted_ids: list[UUID]
    dry_run: bool
