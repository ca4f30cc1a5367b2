"""Database schema DDL and initialization."""

import logging

from psycopg import sql
from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)

_CREATE_EXTENSION = "CREATE EXTENSION IF NOT EXISTS vector"

_CREATE_DOCUMENT = """
CREATE TABLE IF NOT EXISTS document (
    id          UUID PRIMARY KEY,
    title       TEXT NOT NULL,
    content     TEXT NOT NULL,
    created_at  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at  TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""

_CREATE_CHUNK = """
CREATE TABLE IF NOT EXISTS chunk (
    id           UUID PRIMARY KEY,
    document_id  UUID NOT NULL REFERENCES document(id) ON DELETE CASCADE,
    chunk_index  INTEGER NOT NULL,
    kind         VARCHAR(16) NOT NULL DEFAULT 'body',
    content      TEXT NOT NULL,
    start_index  INTEGER NOT NULL CHECK (start_index >= 0),
    end_index    INTEGER NOT NULL CHECK (end_index >= start_index),
    embedding    vector({dimensions}) NOT NULL,
    UNIQUE (document_id, chunk_index)
)
"""

_CREATE_INDEXES = (
    "CREATE INDEX IF NOT EXISTS ix_document_created_at ON document (created_at DESC)",
    "CREATE INDEX IF NOT EXISTS ix_document_title ON document (title)",
    "CREATE INDEX IF NOT EXISTS ix_chunk_document_id ON chunk (document_id)",
    "CREATE INDEX IF NOT EXISTS ix_chunk_embedding ON chunk USING hnsw (embedding vector_cosine_ops)",
)


async def ensure_schema(pool: AsyncConnectionPool, dimensions: int = 384) -> None:
    """Create the pgvector extension, tables and indexes if missing (idempotent)."""
    async with pool.connection() as conn:
        await conn.execute(_CREATE_EXTENSION)
        await conn.execute(_CREATE_DOCUMENT)
        await conn.execute(
            sql.SQL(_CREATE_CHUNK).format(dimensions=sql.Literal(int(dimensions)))
        )
        for statement in _CREATE_INDEXES:
            await conn.execute(statement)
    logger.info("Database schema ready (embedding dimensions=%d)", dimensions)
