"""Delete document use case."""

import logging
from uuid import UUID

from blogsearch.domain.exceptions import NotFound

logger = logging.getLogger(__name__)


class DeleteDocumentUseCase:
    """Delete a document; its chunks go with it."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, document_id: UUID) -> None:
        async with self._uow_factory() as uow:
            deleted = await uow.documents.delete(document_id)
            if not deleted:
                raise NotFound(f"Document {document_id} not found")
        logger.info("Deleted document %s", document_id)
