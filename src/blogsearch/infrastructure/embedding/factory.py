"""Build the configured embedding model."""

from blogsearch.application.ports import EmbeddingModel
from blogsearch.config import Settings
from blogsearch.infrastructure.embedding.openai_model import OpenAIEmbeddingModel
from blogsearch.infrastructure.embedding.sentence_transformer_model import (
    SentenceTransformerEmbeddingModel,
)

DEFAULT_MODELS = {
    "openai": "text-embedding-3-small",
    "sentence-transformers": "sentence-transformers/all-MiniLM-L6-v2",
}


def create_embedding_model(settings: Settings) -> EmbeddingModel:
    """Embedding model for ``settings.embedding_provider``."""
    model = settings.embedding_model or DEFAULT_MODELS[settings.embedding_provider]
    if settings.embedding_provider == "openai":
        return OpenAIEmbeddingModel(
            base_url=settings.embedding_api_url,
            api_key=settings.embedding_api_key,
            model=model,
            dimensions=settings.embedding_dimensions,
        )
    return SentenceTransformerEmbeddingModel(model=model)
