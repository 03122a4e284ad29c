"""Abstract base class for vector-store service providers.

Defines the contract for provisioning the fragment collection, inserting
embedded résumé fragments, and running similarity search over them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from resume_ats.models.rag import Fragment, RetrievedFragment


# Concrete implementation: ChromaDBProvider (resume_ats/providers/vector_store/)
# Data persists to disk at CHROMADB_PERSIST_DIR.
class IVectorStoreProvider(ABC):
    """Contract for the fragment store used by ingestion and retrieval.

    The collection has a fixed vector dimension and uses dot-product
    similarity.  Fragments are append-only; there is no update or delete.
    """

    @abstractmethod
    async def ensure_collection(self) -> None:
        """Create the fragment collection if it does not exist yet.

        Idempotent and safe to call concurrently: when two callers race,
        exactly one collection exists afterwards and neither raises.

        Raises
        ------
        resume_ats.utils.errors.VectorStoreError
            If the store is unreachable.
        """

    @abstractmethod
    async def insert(self, fragment: Fragment) -> None:
        """Persist one fragment.

        Duplicate text is allowed; each call creates a new record.

        Raises
        ------
        ValueError
            If ``len(fragment.vector)`` differs from the collection dimension.
        resume_ats.utils.errors.VectorStoreError
            If the write fails.
        """

    @abstractmethod
    async def search(self, query_vector: list[float], limit: int) -> list[RetrievedFragment]:
        """Return up to *limit* fragments closest to *query_vector*.

        Parameters
        ----------
        query_vector:
            Embedding of the question.
        limit:
            Maximum number of hits.

        Returns
        -------
        list[RetrievedFragment]
            Best match first.  Fewer than *limit* entries when the collection
            holds fewer fragments; empty for an empty collection.

        Raises
        ------
        resume_ats.utils.errors.VectorStoreError
            If the search fails.
        """

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored fragments."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"chromadb"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the backing store has been opened."""
