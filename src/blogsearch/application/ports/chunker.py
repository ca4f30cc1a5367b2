"""Chunker port - text splitting strategies."""

from typing import Protocol

from blogsearch.application.dto.chunking_config import ChunkingConfig
from blogsearch.domain.value_objects import TextSpan


class Chunker(Protocol):
    """Port for splitting text into overlapping spans."""

    def chunk(self, text: str, config: ChunkingConfig) -> list[TextSpan]: ...

    def chunk_document(
        self, title: str, body: str, config: ChunkingConfig
    ) -> list[TextSpan]: ...
