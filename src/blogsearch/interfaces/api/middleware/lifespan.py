"""Lifespan middleware - opens pool, prepares schema and model on startup."""

import logging
from typing import Any

from psycopg_pool import AsyncConnectionPool

from blogsearch.application.services.embedding_gateway import EmbeddingGateway
from blogsearch.infrastructure.persistence.postgres.schema import ensure_schema

logger = logging.getLogger(__name__)


class LifespanMiddleware:
    """Middleware that owns the pool and the embedding model for the app's lifetime."""

    def __init__(self, pool: AsyncConnectionPool, embedding_gateway: EmbeddingGateway) -> None:
        self._pool = pool
        self._embedding_gateway = embedding_gateway

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pool, ensure schema and load the embedding model."""
        await self._pool.open()
        await ensure_schema(self._pool, self._embedding_gateway.dimensions)
        await self._embedding_gateway.initialize()
        logger.info("Startup complete")

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close pool when ASGI server shuts down."""
        await self._pool.close()
