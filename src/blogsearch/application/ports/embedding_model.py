"""Embedding model port - text to raw vector."""

from collections.abc import Sequence
from typing import Protocol


class EmbeddingModel(Protocol):
    """Port for the underlying embedding model."""

    @property
    def name(self) -> str: ...

    async def load(self) -> None: ...

    async def encode(self, text: str) -> Sequence[float]: ...
