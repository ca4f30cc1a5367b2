"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi

from blogsearch.interfaces.api.resources.documents import (
    DocumentReindexResource,
    DocumentResource,
    DocumentsResource,
)
from blogsearch.interfaces.api.resources.health import HealthResource
from blogsearch.interfaces.api.resources.search import SearchResource

logger = logging.getLogger(__name__)


async def _handle_unexpected(req, resp, ex, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "500 Internal Server Error"}


def create_app(
    documents_resource: DocumentsResource,
    document_resource: DocumentResource,
    reindex_resource: DocumentReindexResource,
    search_resource: SearchResource,
    health_resource: HealthResource,
    middleware: list | None = None,
) -> falcon.asgi.App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, _handle_unexpected)
    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")
    app.add_route("/v1/documents", documents_resource)
    app.add_route("/v1/documents/{document_id}", document_resource)
    app.add_route("/v1/documents/{document_id}/reindex", reindex_resource)
    app.add_route("/v1/search", search_resource)
    return app
