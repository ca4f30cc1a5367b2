"""Delete duplicate documents use case."""

import logging

from blogsearch.application.dto.document_dto import DuplicateCleanupResult

logger = logging.getLogger(__name__)


class DeleteDuplicateDocumentsUseCase:
    """Remove documents sharing a title, keeping the oldest of each group."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self, dry_run: bool = False) -> DuplicateCleanupResult:
        """Delete duplicates. With ``dry_run`` only report what would go."""
        kept_ids = []
        deleted_ids = []
        async with self._uow_factory() as uow:
            groups = await uow.documents.list_duplicate_groups()
            for group in groups:
                keep, *duplicates = group
                kept_ids.append(keep.id)
                for duplicate in duplicates:
                    if not dry_run:
                        await uow.documents.delete(duplicate.id)
                    deleted_ids.append(duplicate.id)
                logger.info(
                    "Title %r: keeping %s, %s %d duplicates",
                    keep.title,
                    keep.id,
                    "would delete" if dry_run else "deleted",
                    len(duplicates),
                )

        return DuplicateCleanupResult(
            groups=len(groups),
            kept_ids=kept_ids,
            deleted_ids=deleted_ids,
            dry_run=dry_run,
        )
