"""Domain value objects."""

from blogsearch.domain.value_objects.chunk_kind import ChunkKind
from blogsearch.domain.value_objects.embedding_vector import EmbeddingVector
from blogsearch.domain.value_objects.text_span import TextSpan

__all__ = [
    "ChunkKind",
    "EmbeddingVector",
    "TextSpan",
]
