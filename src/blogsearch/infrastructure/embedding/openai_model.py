"""OpenAI-compatible embedding model."""

from collections.abc import Sequence

from openai import AsyncOpenAI


class OpenAIEmbeddingModel:
    """Embedding model behind an OpenAI-compatible /embeddings endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        dimensions: int,
    ) -> None:
        self._base_url = base_url
        self._api_key = api_key
        self._model = model
        self._dimensions = dimensions
        self._client: AsyncOpenAI | None = None

    @property
    def name(self) -> str:
        return self._model

    async def load(self) -> None:
        """Create the API client."""
        self._client = AsyncOpenAI(base_url=self._base_url, api_key=self._api_key)

    async def encode(self, text: str) -> Sequence[float]:
        """Generate the embedding for one text."""
        if self._client is None:
            raise RuntimeError("OpenAI client not loaded")
        response = await self._client.embeddings.create(
            model=self._model,
            input=[text],
            dimensions=self._dimensions,
        )
        return response.data[0].embedding
