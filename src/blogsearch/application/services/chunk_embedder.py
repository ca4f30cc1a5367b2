"""Concurrent chunk embedding with per-chunk failure isolation."""

import asyncio
import logging
from collections.abc import Sequence
from uuid import UUID, uuid4

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)
from tenacity.wait import wait_base

from blogsearch.application.services.embedding_gateway import EmbeddingGateway
from blogsearch.domain.entities import Chunk
from blogsearch.domain.exceptions import DimensionMismatch, EmbeddingFailure
from blogsearch.domain.value_objects import TextSpan

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 10


class ChunkEmbedder:
    """Turn text spans into embedded chunks, at most ``concurrency`` at a time.

    A span whose embedding keeps failing after ``max_attempts`` is logged and
    dropped; the rest of the batch carries on. Dimension mismatches are not
    retried. Any other error (e.g. NotInitialized) propagates.
    """

    def __init__(
        self,
        gateway: EmbeddingGateway,
        concurrency: int = DEFAULT_CONCURRENCY,
        max_attempts: int = 1,
        retry_wait: wait_base | None = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self._gateway = gateway
        self._concurrency = concurrency
        self._max_attempts = max_attempts
        self._retry_wait = retry_wait or wait_exponential_jitter(multiplier=0.5, max=5)

    async def embed_batch(
        self, jobs: Sequence[tuple[UUID, Sequence[TextSpan]]]
    ) -> list[list[Chunk]]:
        """Embed the spans of several documents.

        Returns one list per job, in job order, holding the chunks that were
        embedded successfully in chunk index order.
        """
        semaphore = asyncio.Semaphore(self._concurrency)

        async def _embed_span(document_id: UUID, span: TextSpan) -> Chunk | None:
            async with semaphore:
                try:
                    vector = await self._embed_with_retry(span.text)
                except EmbeddingFailure as exc:
                    logger.warning(
                        "Dropping chunk %d of document %s: %s",
                        span.chunk_index,
                        document_id,
                        exc,
                    )
                    return None
            return Chunk(
                id=uuid4(),
                document_id=document_id,
                chunk_index=span.chunk_index,
                content=span.text,
                start_index=span.start_index,
                end_index=span.end_index,
                embedding=vector,
                kind=span.kind,
            )

        per_job = [
            [_embed_span(document_id, span) for span in spans]
            for document_id, spans in jobs
        ]
        flat = await asyncio.gather(*(coro for coros in per_job for coro in coros))

        results: list[list[Chunk]] = []
        offset = 0
        for coros in per_job:
            embedded = flat[offset : offset + len(coros)]
            offset += len(coros)
            results.append([chunk for chunk in embedded if chunk is not None])
        return results

    async def _embed_with_retry(self, text: str) -> list[float]:
        vector: list[float] = []
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            retry=(
                retry_if_exception_type(EmbeddingFailure)
                & retry_if_not_exception_type(DimensionMismatch)
            ),
            wait=self._retry_wait,
            reraise=True,
        ):
            with attempt:
                vector = await self._gateway.embed(text)
        return vector
