"""OpenAI-compatible embedding provider adapter.

Wraps the ``openai`` async client to implement :class:`IEmbeddingProvider`.
Works with real OpenAI and with OpenAI-compatible endpoints via a custom
``base_url``.
"""

from __future__ import annotations

import openai
import structlog

from resume_ats.config.settings import Settings
from resume_ats.interfaces.embedding_provider import IEmbeddingProvider
from resume_ats.utils.errors import EmbeddingError

logger = structlog.get_logger(logger_name=__name__)

# Known embedding model dimensions.
_MODEL_DIMENSIONS: dict[str, int] = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by an OpenAI-compatible embeddings API.

    Uses ``text-embedding-3-small`` (1536 dims) by default.  Models missing
    from the known-dimension table are assumed to produce
    ``settings.vector_dimension`` floats.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._api_key = settings.openai_api_key

        # Created on first use; the SDK refuses to construct without a key.
        self._client: openai.AsyncOpenAI | None = None
        self._model = settings.openai_embedding_model or "text-embedding-3-small"
        self._dimension = _MODEL_DIMENSIONS.get(self._model, settings.vector_dimension)
        self._provider_label = (
            "openai-compatible_embedding" if settings.openai_base_url else "openai_embedding"
        )

    # ------------------------------------------------------------------
    # IEmbeddingProvider implementation
    # ------------------------------------------------------------------

    async def embed_single(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text string."""
        if not text:
            raise ValueError("Cannot embed empty text")

        client = self._get_client()
        try:
            response = await client.embeddings.create(
                input=text,
                model=self._model,
                encoding_format="float",
            )
        except openai.APITimeoutError as exc:
            raise EmbeddingError(
                message=f"{self._provider_label} timed out",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIError as exc:
            raise EmbeddingError(
                message=f"{self._provider_label} API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not response.data or not response.data[0].embedding:
            raise EmbeddingError(
                message=f"{self._provider_label} returned no embedding",
                provider_name=self.get_provider_name(),
            )

        logger.debug(
            "openai_embedding",
            model=self._model,
            provider=self._provider_label,
            tokens=response.usage.total_tokens if response.usage else None,
        )
        return list(response.data[0].embedding)

    def get_dimension(self) -> int:
        return self._dimension

    def get_provider_name(self) -> str:
        return self._provider_label

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured."""
        return bool(self._api_key)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get_client(self) -> openai.AsyncOpenAI:
        if not self._api_key:
            raise EmbeddingError(
                message="OPENAI_API_KEY is not configured",
                provider_name=self.get_provider_name(),
            )
        if self._client is None:
            client_kwargs: dict = {"api_key": self._api_key}
            if self._settings.openai_base_url:
                client_kwargs["base_url"] = self._settings.openai_base_url
            self._client = openai.AsyncOpenAI(**client_kwargs)
        return self._client
