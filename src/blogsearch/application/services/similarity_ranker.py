"""Similarity ranker - one best chunk per document, globally ranked."""

import math
from collections.abc import Iterable, Sequence
from uuid import UUID

from blogsearch.application.dto.search_dto import (
    MAX_SEARCH_LIMIT,
    MIN_SEARCH_LIMIT,
    ChunkCandidate,
    SearchResult,
)
from blogsearch.domain.exceptions import DimensionMismatch, InvalidArgument


def validate_limit(limit: int) -> None:
    """Raise InvalidArgument unless 1 <= limit <= 100."""
    if (
        isinstance(limit, bool)
        or not isinstance(limit, int)
        or not MIN_SEARCH_LIMIT <= limit <= MAX_SEARCH_LIMIT
    ):
        raise InvalidArgument(
            f"Limit must be between {MIN_SEARCH_LIMIT} and {MAX_SEARCH_LIMIT}"
        )


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between *a* and *b*, clamped to [-1, 1]."""
    if len(a) != len(b):
        raise DimensionMismatch(len(a), len(b))
    dot = math.fsum(x * y for x, y in zip(a, b))
    norm = math.sqrt(math.fsum(x * x for x in a)) * math.sqrt(math.fsum(y * y for y in b))
    if norm == 0.0:
        return 0.0
    return max(-1.0, min(1.0, dot / norm))


class SimilarityRanker:
    """Rank chunk candidates against a query vector."""

    def rank(
        self,
        query_vector: Sequence[float],
        candidates: Iterable[ChunkCandidate],
        limit: int,
    ) -> list[SearchResult]:
        """Keep the best chunk per document and return the top *limit* documents.

        Within a document ties go to the lowest chunk index; across
        documents ties go to the lowest document id.
        """
        validate_limit(limit)

        best: dict[UUID, tuple[float, ChunkCandidate]] = {}
        for candidate in candidates:
            if not candidate.chunk.embedding:
                continue
            score = cosine_similarity(query_vector, candidate.chunk.embedding)
            doc_id = candidate.document.id
            current = best.get(doc_id)
            if current is None or _beats(score, candidate, *current):
                best[doc_id] = (score, candidate)

        ranked = sorted(best.values(), key=lambda item: (-item[0], item[1].document.id))
        return [_to_result(score, candidate) for score, candidate in ranked[:limit]]


def _beats(score: float, candidate: ChunkCandidate, best_score: float, best: ChunkCandidate) -> bool:
    if score != best_score:
        return score > best_score
    return candidate.chunk.chunk_index < best.chunk.chunk_index


def _to_result(score: float, candidate: ChunkCandidate) -> SearchResult:
    document, chunk = candidate.document, candidate.chunk
    return SearchResult(
        document_id=document.id,
        title=document.title,
        content=document.content,
        matched_chunk_text=chunk.content,
        matched_chunk_index=chunk.chunk_index,
        matched_chunk_start=chunk.start_index,
        matched_chunk_end=chunk.end_index,
        similarity=score,
        created_at=document.created_at,
        updated_at=document.updated_at,
    )
