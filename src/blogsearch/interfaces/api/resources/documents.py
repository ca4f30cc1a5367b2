"""Document API resources."""

import logging
from uuid import UUID

import falcon.asgi

from blogsearch.application.dto.document_dto import DocumentCreateInput
from blogsearch.application.use_cases.document.delete_document import DeleteDocumentUseCase
from blogsearch.application.use_cases.document.get_document import GetDocumentUseCase
from blogsearch.application.use_cases.document.ingest_documents import IngestDocumentsUseCase
from blogsearch.application.use_cases.document.list_documents import ListDocumentsUseCase
from blogsearch.application.use_cases.document.reindex_document import ReindexDocumentUseCase
from blogsearch.domain.exceptions import BlogSearchError, InvalidArgument, NotFound
from blogsearch.interfaces.api.serializers import document_to_dict, ingest_result_to_dict

logger = logging.getLogger(__name__)


def _parse_inputs(body: object) -> list[DocumentCreateInput]:
    """Accept ``{title, content}`` or ``{documents: [{title, content}, ...]}``."""
    if not isinstance(body, dict):
        raise InvalidArgument("Request body must be a JSON object")
    items = body["documents"] if "documents" in body else [body]
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise InvalidArgument("documents must be a list of objects")
    return [
        DocumentCreateInput(title=item.get("title"), content=item.get("content"))
        for item in items
    ]


def _parse_document_id(document_id: str) -> UUID:
    try:
        return UUID(document_id)
    except ValueError:
        raise InvalidArgument("Invalid document ID") from None


class DocumentsResource:
    """GET /v1/documents - list; POST /v1/documents - create one or many."""

    def __init__(
        self,
        ingest_documents: IngestDocumentsUseCase,
        list_documents: ListDocumentsUseCase,
    ) -> None:
        self._ingest_documents = ingest_documents
        self._list_documents = list_documents

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List all documents, newest first."""
        documents = await self._list_documents.execute()
        resp.media = {
            "count": len(documents),
            "items": [document_to_dict(d) for d in documents],
        }
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create documents in one atomic batch."""
        try:
            body = await req.get_media()
        except falcon.HTTPBadRequest:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return

        try:
            results = await self._ingest_documents.execute(_parse_inputs(body))
        except InvalidArgument as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except BlogSearchError as e:
            logger.error("Failed to create documents: %s", e)
            resp.status = falcon.HTTP_500
            resp.media = {"error": "Failed to create documents", "message": str(e)}
            return

        resp.media = {
            "count": len(results),
            "items": [ingest_result_to_dict(r) for r in results],
        }
        resp.status = falcon.HTTP_201


class DocumentResource:
    """GET/DELETE /v1/documents/{id}."""

    def __init__(
        self,
        get_document: GetDocumentUseCase,
        delete_document: DeleteDocumentUseCase,
    ) -> None:
        self._get_document = get_document
        self._delete_document = delete_document

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        """Get document by id."""
        try:
            result = await self._get_document.execute(_parse_document_id(document_id))
        except InvalidArgument as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        resp.media = document_to_dict(result)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        """Delete document and its chunks."""
        try:
            await self._delete_document.execute(_parse_document_id(document_id))
        except InvalidArgument as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        resp.status = falcon.HTTP_204


class DocumentReindexResource:
    """POST /v1/documents/{id}/reindex - rebuild the document's chunks."""

    def __init__(self, reindex_document: ReindexDocumentUseCase) -> None:
        self._reindex_document = reindex_document

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, document_id: str
    ) -> None:
        try:
            result = await self._reindex_document.execute(_parse_document_id(document_id))
        except InvalidArgument as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Document not found"}
            return
        except BlogSearchError as e:
            logger.error("Failed to reindex document %s: %s", document_id, e)
            resp.status = falcon.HTTP_500
            resp.media = {"error": "Failed to reindex document", "message": str(e)}
            return
        resp.media = ingest_result_to_dict(result)
        resp.status = falcon.HTTP_200
