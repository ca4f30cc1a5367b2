"""Search API resource."""

import logging

import falcon.asgi

from blogsearch.application.dto.search_dto import SearchInput
from blogsearch.application.use_cases.search.semantic_search import SemanticSearchUseCase
from blogsearch.domain.exceptions import BlogSearchError, InvalidArgument
from blogsearch.interfaces.api.serializers import search_result_to_dict

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


class SearchResource:
    """GET /v1/search?q=...&limit=10 - semantic search."""

    def __init__(self, semantic_search: SemanticSearchUseCase) -> None:
        self._semantic_search = semantic_search

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Execute semantic search."""
        query = req.get_param("q") or ""
        if not query.strip():
            resp.status = falcon.HTTP_400
            resp.media = {"error": 'Query parameter "q" is required'}
            return

        raw_limit = req.get_param("limit")
        try:
            limit = int(raw_limit) if raw_limit is not None else DEFAULT_LIMIT
        except ValueError:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Limit must be a number between 1 and 100"}
            return

        try:
            results = await self._semantic_search.execute(
                SearchInput(query=query.strip(), limit=limit)
            )
        except InvalidArgument as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return
        except BlogSearchError as e:
            logger.error("Search failed: %s", e)
            resp.status = falcon.HTTP_500
            resp.media = {"error": "Failed to search documents", "message": str(e)}
            return

        resp.media = {
            "query": query,
            "count": len(results),
            "results": [search_result_to_dict(r) for r in results],
        }
        resp.status = falcon.HTTP_200
