"""Chunking configuration DTO."""

from dataclasses import dataclass

from blogsearch.domain.exceptions import InvalidArgument


@dataclass(frozen=True)
class ChunkingConfig:
    """Configuration for text chunking (sizes in characters)."""

    chunk_size: int = 500
    chunk_overlap: int = 100

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise InvalidArgument(f"chunk_size must be >= 1, got {self.chunk_size}")
        if self.chunk_overlap < 0:
            raise InvalidArgument(
                f"chunk_overlap must be >= 0, got {self.chunk_overlap}"
            )
