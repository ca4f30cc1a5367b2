"""PostgreSQL chunk repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from blogsearch.application.dto.search_dto import ChunkCandidate
from blogsearch.domain.entities import Chunk, Document
from blogsearch.domain.value_objects import ChunkKind

_COLUMNS = (
    "id, document_id, chunk_index, kind, content, start_index, end_index, "
    "embedding::real[]"
)


def _row_to_chunk(r: tuple) -> Chunk:
    return Chunk(
        id=r[0],
        document_id=r[1],
        chunk_index=r[2],
        kind=ChunkKind(r[3]),
        content=r[4],
        start_index=r[5],
        end_index=r[6],
        embedding=[float(v) for v in r[7]],
    )


class PostgresChunkRepository:
    """Chunk repository implementation with pgvector cosine search."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def create_batch(self, chunks: list[Chunk]) -> list[Chunk]:
        """Create chunks in batch."""
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO chunk (id, document_id, chunk_index, kind, content, "
                "start_index, end_index, embedding) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s::vector)",
                [
                    (
                        c.id,
                        c.document_id,
                        c.chunk_index,
                        str(c.kind),
                        c.content,
                        c.start_index,
                        c.end_index,
                        c.embedding,
                    )
                    for c in chunks
                ],
            )
        return chunks

    async def delete_by_document_id(self, document_id: UUID) -> None:
        """Delete all chunks for document."""
        await self._conn.execute("DELETE FROM chunk WHERE document_id = %s", (document_id,))

    async def get_by_document_id(self, document_id: UUID) -> list[Chunk]:
        """Get chunks by document id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM chunk WHERE document_id = %s ORDER BY chunk_index",
            (document_id,),
        )
        rows = await cur.fetchall()
        return [_row_to_chunk(r) for r in rows]

    async def count_by_document_id(self, document_id: UUID) -> int:
        """Count chunks of a document."""
        cur = await self._conn.execute(
            "SELECT COUNT(*) FROM chunk WHERE document_id = %s", (document_id,)
        )
        r = await cur.fetchone()
        return int(r[0])

    async def search_candidates(
        self, query_embedding: list[float], limit: int
    ) -> list[ChunkCandidate]:
        """Nearest chunk of each document, for the *limit* nearest documents."""
        cur = await self._conn.execute(
            """
            WITH ranked_chunks AS (
                SELECT d.id AS d_id, d.title, d.content AS d_content,
                       d.created_at, d.updated_at,
                       c.id, c.document_id, c.chunk_index, c.kind, c.content,
                       c.start_index, c.end_index, c.embedding::real[] AS embedding,
                       c.embedding <=> %(query)s::vector AS distance,
                       ROW_NUMBER() OVER (
                           PARTITION BY d.id
                           ORDER BY c.embedding <=> %(query)s::vector, c.chunk_index
                       ) AS rn
                FROM chunk c
                INNER JOIN document d ON c.document_id = d.id
            )
            SELECT d_id, title, d_content, created_at, updated_at,
                   id, document_id, chunk_index, kind, content,
                   start_index, end_index, embedding
            FROM ranked_chunks
            WHERE rn = 1
            ORDER BY distance, d_id
            LIMIT %(limit)s
            """,
            {"query": query_embedding, "limit": limit},
        )
        rows = await cur.fetchall()
        return [
            ChunkCandidate(
                document=Document(
                    id=r[0], title=r[1], content=r[2], created_at=r[3], updated_at=r[4]
                ),
                chunk=_row_to_chunk(r[5:]),
            )
            for r in rows
        ]
