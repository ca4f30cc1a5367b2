"""Ingest documents use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from blogsearch.application.dto.chunking_config import ChunkingConfig
from blogsearch.application.dto.document_dto import (
    DocumentCreateInput,
    DocumentOutput,
    IngestResult,
)
from blogsearch.application.ports import Chunker
from blogsearch.application.services.chunk_embedder import ChunkEmbedder
from blogsearch.domain.entities import Document
from blogsearch.domain.exceptions import InvalidArgument
from blogsearch.domain.text import normalize_text

logger = logging.getLogger(__name__)


class IngestDocumentsUseCase:
    """Ingest documents: normalize, chunk, embed, save - one transaction per call."""

    def __init__(
        self,
        unit_of_work_factory: type,
        chunker: Chunker,
        chunk_embedder: ChunkEmbedder,
        chunking_config: ChunkingConfig,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._chunker = chunker
        self._chunk_embedder = chunk_embedder
        self._chunking_config = chunking_config

    async def execute(self, inputs: list[DocumentCreateInput]) -> list[IngestResult]:
        """Persist all documents and their embedded chunks, or nothing.

        Chunks whose embedding fails are dropped without aborting the call;
        a storage failure rolls back every document of the call.
        """
        if not inputs:
            raise InvalidArgument("At least one document is required")
        for item in inputs:
            if not _is_text(item.title) or not _is_text(item.content):
                raise InvalidArgument("Title and content are required")

        normalized = [
            (normalize_text(item.title), normalize_text(item.content)) for item in inputs
        ]
        if any(not title or not content for title, content in normalized):
            raise InvalidArgument("Title and content cannot be empty after normalization")

        now = datetime.now(UTC)
        documents = [
            Document(
                id=uuid4(),
                title=title,
                content=content,
                created_at=now,
                updated_at=now,
            )
            for title, content in normalized
        ]

        async with self._uow_factory() as uow:
            await uow.documents.create_batch(documents)

            jobs = []
            for document in documents:
                spans = self._chunker.chunk_document(
                    document.title, document.content, self._chunking_config
                )
                logger.info("Created %d chunks for document %s", len(spans), document.id)
                jobs.append((document.id, spans))

            embedded = await self._chunk_embedder.embed_batch(jobs)
            chunks = [chunk for doc_chunks in embedded for chunk in doc_chunks]
            if chunks:
                await uow.chunks.create_batch(chunks)

        generated = sum(len(spans) for _, spans in jobs)
        logger.info(
            "Ingested %d documents with %d of %d chunks",
            len(documents),
            len(chunks),
            generated,
        )
        return [
            IngestResult(
                document=DocumentOutput.from_entity(document, len(doc_chunks)),
                chunk_count=len(doc_chunks),
            )
            for document, doc_chunks in zip(documents, embedded, strict=True)
        ]

    async def execute_one(self, input_data: DocumentCreateInput) -> IngestResult:
        """Ingest a single document."""
        results = await self.execute([input_data])
        return results[0]


def _is_text(value: object) -> bool:
    return isinstance(value, str) and bool(value)
