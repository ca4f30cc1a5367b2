"""Application ports - interfaces for external adapters."""

from blogsearch.application.ports.chunker import Chunker
from blogsearch.application.ports.embedding_model import EmbeddingModel
from blogsearch.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "Chunker",
    "EmbeddingModel",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
