"""Embedding gateway - lifecycle and contract around the embedding model."""

import asyncio
import logging

from blogsearch.application.ports import EmbeddingModel
from blogsearch.domain.exceptions import (
    EmbeddingFailure,
    InvalidInput,
    NotInitialized,
)
from blogsearch.domain.text import normalize_text
from blogsearch.domain.value_objects import EmbeddingVector

logger = logging.getLogger(__name__)

DEFAULT_DIMENSIONS = 384


class EmbeddingGateway:
    """Owns the embedding model: loads it once, then turns text into unit vectors.

    One instance is built in the composition root and shared by the use
    cases. ``initialize()`` may be awaited by several callers at once; the
    model is loaded exactly once and every caller sees a ready gateway.
    """

    def __init__(self, model: EmbeddingModel, dimensions: int = DEFAULT_DIMENSIONS) -> None:
        self._model = model
        self._dimensions = dimensions
        self._ready = False
        self._lock = asyncio.Lock()

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def initialize(self) -> "EmbeddingGateway":
        """Load the model. Calls after the first are no-ops."""
        if self._ready:
            logger.debug("Embedding model %s already initialized", self._model.name)
            return self
        async with self._lock:
            if not self._ready:
                logger.info("Loading embedding model %s", self._model.name)
                await self._model.load()
                self._ready = True
                logger.info("Embedding model %s loaded", self._model.name)
        return self

    async def embed(self, text: str) -> list[float]:
        """Return the normalized ``dimensions``-long vector for *text*."""
        if not self._ready:
            raise NotInitialized(
                "Embedding model not initialized. Call initialize() first."
            )
        if not text or not isinstance(text, str):
            raise InvalidInput("Text must be a non-empty string")
        normalized = normalize_text(text)
        if not normalized:
            raise InvalidInput("Text is empty after normalization")

        try:
            raw = await self._model.encode(normalized)
        except Exception as exc:
            raise EmbeddingFailure(f"Embedding model {self._model.name} failed: {exc}") from exc

        return EmbeddingVector.normalized(raw, self._dimensions).to_list()
