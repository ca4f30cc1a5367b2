"""Get document use case."""

from uuid import UUID

from blogsearch.application.dto.document_dto import DocumentOutput
from blogsearch.domain.exceptions import NotFound


class GetDocumentUseCase:
    """Get document by id with its chunk count."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID) -> DocumentOutput:
        """Get document by id."""
        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(document_id)
            if not document:
                raise NotFound(f"Document {document_id} not found")
            chunk_count = await uow.chunks.count_by_document_id(document_id)
            return DocumentOutput.from_entity(document, chunk_count)
