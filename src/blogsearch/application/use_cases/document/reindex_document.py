"""Reindex document use case - rebuild a document's chunk set."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from blogsearch.application.dto.chunking_config import ChunkingConfig
from blogsearch.application.dto.document_dto import DocumentOutput, IngestResult
from blogsearch.application.ports import Chunker
from blogsearch.application.services.chunk_embedder import ChunkEmbedder
from blogsearch.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class ReindexDocumentUseCase:
    """Re-chunk and re-embed one document, replacing its chunks."""

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

    async def execute(self, document_id: UUID) -> IngestResult:
        """Reindex document. Returns the document and its new chunk count."""
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if not document:
                raise NotFound(f"Document {document_id} not found")

            spans = self._chunker.chunk_document(
                document.title, document.content, self._chunking_config
            )
            [chunks] = await self._chunk_embedder.embed_batch([(document.id, spans)])

            await uow.chunks.delete_by_document_id(document.id)
            if chunks:
                await uow.chunks.create_batch(chunks)

            document.updated_at = datetime.now(UTC)
            await uow.documents.touch(document)

        logger.info(
            "Reindexed document %s with %d of %d chunks", document.id, len(chunks), len(spans)
        )
        return IngestResult(
            document=DocumentOutput.from_entity(document, len(chunks)),
            chunk_count=len(chunks),
        )
