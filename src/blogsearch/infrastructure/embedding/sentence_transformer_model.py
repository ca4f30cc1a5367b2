"""Local sentence-transformers embedding model."""

import asyncio
from collections.abc import Sequence


class SentenceTransformerEmbeddingModel:
    """Runs a sentence-transformers model in-process.

    The default ``all-MiniLM-L6-v2`` yields 384-dimensional mean-pooled
    vectors. Loading and encoding are CPU bound and run in worker threads.
    """

    def __init__(self, model: str = "sentence-transformers/all-MiniLM-L6-v2") -> None:
        self._model_name = model
        self._model = None

    @property
    def name(self) -> str:
        return self._model_name

    async def load(self) -> None:
        from sentence_transformers import SentenceTransformer

        self._model = await asyncio.to_thread(SentenceTransformer, self._model_name)

    async def encode(self, text: str) -> Sequence[float]:
        if self._model is None:
            raise RuntimeError(f"Model {self._model_name} not loaded")
        vector = await asyncio.to_thread(
            self._model.encode,
            text,
            convert_to_numpy=True,
            normalize_embeddings=True,
            show_progress_bar=False,
        )
        return vector.tolist()
