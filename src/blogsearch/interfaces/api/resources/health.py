"""Health check endpoints."""

import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

import falcon.asgi

from blogsearch.application.services.embedding_gateway import EmbeddingGateway

logger = logging.getLogger(__name__)


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(
        self,
        database_check: Callable[[], Awaitable[None]] | None = None,
        embedding_gateway: EmbeddingGateway | None = None,
    ) -> None:
        self._database_check = database_check
        self._embedding_gateway = embedding_gateway

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness (database, embedding model)."""
        timestamp = datetime.now(UTC).isoformat()
        try:
            if self._database_check is not None:
                await self._database_check()
        except Exception as e:
            logger.warning("Database readiness check failed: %s", e)
            resp.media = {
                "status": "unhealthy",
                "timestamp": timestamp,
                "database": "disconnected",
                "error": str(e),
            }
            resp.status = falcon.HTTP_503
            return

        model_ready = self._embedding_gateway is None or self._embedding_gateway.is_ready
        resp.media = {
            "status": "healthy" if model_ready else "unhealthy",
            "timestamp": timestamp,
            "database": "connected",
            "embeddingModel": "ready" if model_ready else "not initialized",
        }
        resp.status = falcon.HTTP_200 if model_ready else falcon.HTTP_503
