"""Semantic search use case - best chunk per document."""

import logging

from blogsearch.application.dto.search_dto import SearchInput, SearchResult
from blogsearch.application.services.embedding_gateway import EmbeddingGateway
from blogsearch.application.services.similarity_ranker import (
    SimilarityRanker,
    validate_limit,
)
from blogsearch.domain.exceptions import InvalidArgument

logger = logging.getLogger(__name__)


class SemanticSearchUseCase:
    """Embed the query and rank stored chunks, one result per document."""

    def __init__(
        self,
        unit_of_work_factory: type,
        embedding_gateway: EmbeddingGateway,
        ranker: SimilarityRanker | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._embedding_gateway = embedding_gateway
        self._ranker = ranker or SimilarityRanker()

    async def execute(self, input_data: SearchInput) -> list[SearchResult]:
        """Execute semantic search.

        Embedding failures for the query are not recovered: they propagate
        to the caller.
        """
        if not isinstance(input_data.query, str) or not input_data.query.strip():
            raise InvalidArgument("Query must be a non-empty string")
        validate_limit(input_data.limit)

        query_embedding = await self._embedding_gateway.embed(input_data.query.strip())

        async with self._uow_factory() as uow:
            candidates = await uow.chunks.search_candidates(query_embedding, input_data.limit)

        results = self._ranker.rank(query_embedding, candidates, input_data.limit)
        logger.info("Found %d results for query", len(results))
        return results
