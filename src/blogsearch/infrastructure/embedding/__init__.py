"""Embedding model adapters."""

from blogsearch.infrastructure.embedding.factory import DEFAULT_MODELS, create_embedding_model

__all__ = [
    "DEFAULT_MODELS",
    "create_embedding_model",
]
