"""Abstract base class for text-embedding service providers.

Defines the contract for turning one text into a fixed-length vector.  The
ingestion pipeline embeds each résumé chunk with it, and the prompt
assembler embeds the incoming question before similarity search.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: OpenAIEmbeddingProvider (resume_ats/providers/embedding/)
class IEmbeddingProvider(ABC):
    """Contract for text-embedding services.

    Vectors produced here are stored and searched through
    :class:`~resume_ats.interfaces.vector_store_provider.IVectorStoreProvider`,
    so :meth:`get_dimension` must match the collection's dimension.
    """

    @abstractmethod
    async def embed_single(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text string.

        Parameters
        ----------
        text:
            The text to embed.  Must be non-empty.

        Returns
        -------
        list[float]
            The embedding vector with length equal to :meth:`get_dimension`.

        Raises
        ------
        ValueError
            If *text* is empty.  Nothing is sent upstream.
        resume_ats.utils.errors.EmbeddingError
            If the API call fails, times out, or returns no vector.
        """

    @abstractmethod
    def get_dimension(self) -> int:
        """Return the dimensionality of the embedding vectors.

        Example value: ``1536`` (OpenAI ``text-embedding-3-small``).
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"openai-text-embedding-3-small"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if credentials are present.  No request is made."""
