"""Text span produced by the chunker."""

from dataclasses import dataclass

from blogsearch.domain.value_objects.chunk_kind import ChunkKind


@dataclass(frozen=True)
class TextSpan:
    """Chunk text with its offsets into the source text (end exclusive)."""

    text: str
    start_index: int
    end_index: int
    chunk_index: int
    kind: ChunkKind = ChunkKind.BODY

    def __post_init__(self) -> None:
        if self.start_index < 0 or self.end_index < self.start_index:
            raise ValueError(
                f"Invalid span offsets [{self.start_index}, {self.end_index})"
            )

    def to_dict(self) -> dict[str, object]:
        """Chunk record wire shape."""
        return {
            "text": self.text,
            "startIndex": self.start_index,
            "endIndex": self.end_index,
            "chunkIndex": self.chunk_index,
        }
