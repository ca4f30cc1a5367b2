"""PostgreSQL document repository implementation."""

from itertools import groupby
from uuid import UUID

from psycopg import AsyncConnection

from blogsearch.domain.entities import Document

_COLUMNS = "id, title, content, created_at, updated_at"


def _row_to_document(r: tuple) -> Document:
    return Document(id=r[0], title=r[1], content=r[2], created_at=r[3], updated_at=r[4])


class PostgresDocumentRepository:
    """Document repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create_batch(self, documents: list[Document]) -> list[Document]:
        """Create documents in batch."""
        async with self._conn.cursor() as cur:
            await cur.executemany(
                f"INSERT INTO document ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s)",
                [
                    (d.id, d.title, d.content, d.created_at, d.updated_at)
                    for d in documents
                ],
            )
        return documents

    async def get_by_id(self, document_id: UUID) -> Document | None:
        """Get document by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document WHERE id = %s",
            (document_id,),
        )
        r = await cur.fetchone()
        return _row_to_document(r) if r else None

    async def list_all(self) -> list[Document]:
        """List all documents, newest first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM document ORDER BY created_at DESC, id"
        )
        rows = await cur.fetchall()
        return [_row_to_document(r) for r in rows]

    async def list_duplicate_groups(self) -> list[list[Document]]:
        """Documents sharing a title, grouped by title, oldest first in each group."""
        cur = await self._conn.execute(
            f"""
            SELECT {_COLUMNS} FROM document
            WHERE title IN (
                SELECT title FROM document GROUP BY title HAVING COUNT(*) > 1
            )
            ORDER BY title, created_at, id
            """
        )
        rows = await cur.fetchall()
        documents = [_row_to_document(r) for r in rows]
        return [list(group) for _, group in groupby(documents, key=lambda d: d.title)]

    async def touch(self, document: Document) -> Document:
        """Persist the document's updated_at."""
        await self._conn.execute(
            "UPDATE document SET updated_at = %s WHERE id = %s",
            (document.updated_at, document.id),
        )
        return document

    async def delete(self, document_id: UUID) -> bool:
        """Delete document; chunks cascade. Returns False if it did not exist."""
        cur = await self._conn.execute("DELETE FROM document WHERE id = %s", (document_id,))
        return cur.rowcount > 0
