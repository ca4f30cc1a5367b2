"""List documents use case."""

from blogsearch.application.dto.document_dto import DocumentOutput


class ListDocumentsUseCase:
    """All documents, newest first."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self) -> list[DocumentOutput]:
        async with self._uow_factory() as uow:
            documents = await uow.documents.list_all()
            return [DocumentOutput.from_entity(d) for d in documents]
