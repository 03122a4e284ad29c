"""ChromaDB vector store provider adapter.

Wraps ``chromadb.PersistentClient`` to implement :class:`IVectorStoreProvider`.
The collection uses inner-product ("ip") space so search ranks fragments by
dot product, which for the unit-length OpenAI embeddings orders results the
same way as cosine similarity.
"""

from __future__ import annotations

import asyncio
import os
import uuid
from typing import Any

# ChromaDB's PostHog telemetry is switched off before import and again via
# client Settings below.
os.environ["ANONYMIZED_TELEMETRY"] = "False"

import chromadb
import structlog

from resume_ats.interfaces.vector_store_provider import IVectorStoreProvider
from resume_ats.models.rag import Fragment, RetrievedFragment
from resume_ats.utils.errors import VectorStoreError

logger = structlog.get_logger(logger_name=__name__)


class _NoopEmbeddingFunction(chromadb.EmbeddingFunction[list[str]]):
    """No-op embedding function that prevents ChromaDB from loading a model.

    Every insert and search passes a pre-computed vector, so ChromaDB's
    built-in embedding is never invoked.  Without this, ChromaDB downloads
    its default ONNX model on collection creation.
    """

    def __call__(self, input: list[str]) -> list[list[float]]:
        raise NotImplementedError(
            "Fragments carry pre-computed embeddings; "
            "ChromaDB's built-in embedding should never be called."
        )

    def name(self) -> str:
        """Return function name (required by ChromaDB's EmbeddingFunction protocol)."""
        return "noop_precomputed"


class ChromaDBProvider(IVectorStoreProvider):
    """Fragment store backed by ChromaDB with local persistence.

    The collection is provisioned on :meth:`ensure_collection`, which the
    application calls at startup; every other operation provisions lazily
    if startup was skipped (e.g. from the CLI).
    """

    def __init__(
        self,
        persist_directory: str = "./data/chromadb",
        collection_name: str = "resume_fragments",
        dimension: int = 1536,
    ) -> None:
        self._persist_directory = persist_directory
        self._collection_name = collection_name
        self._dimension = dimension
        self._client = chromadb.PersistentClient(
            path=persist_directory,
            settings=chromadb.config.Settings(anonymized_telemetry=False),
        )
        self._collection: Any = None
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # IVectorStoreProvider implementation
    # ------------------------------------------------------------------

    async def ensure_collection(self) -> None:
        """Create the fragment collection if absent; reuse it otherwise.

        ``get_or_create_collection`` is idempotent on the ChromaDB side and
        the lock serialises concurrent callers inside this process.
        """
        if self._collection is not None:
            return

        async with self._lock:
            if self._collection is not None:
                return
            metadata = {"hnsw:space": "ip"}
            try:
                try:
                    collection = self._client.get_or_create_collection(
                        name=self._collection_name,
                        metadata=metadata,
                        embedding_function=_NoopEmbeddingFunction(),
                    )
                except ValueError:
                    # Collection persisted with a different embedding function.
                    collection = self._client.get_or_create_collection(
                        name=self._collection_name,
                        metadata=metadata,
                    )
            except Exception as exc:
                raise VectorStoreError(
                    message=f"ChromaDB collection provisioning failed: {exc}",
                    provider_name=self.get_provider_name(),
                ) from exc

            self._collection = collection
            logger.info(
                "chromadb_collection_ready",
                collection=self._collection_name,
                dimension=self._dimension,
                count=collection.count(),
            )

    async def insert(self, fragment: Fragment) -> None:
        """Add one fragment.  Never overwrites; ids are unique per fragment."""
        if len(fragment.vector) != self._dimension:
            raise ValueError(
                f"vector dimension mismatch: expected {self._dimension}, "
                f"got {len(fragment.vector)}"
            )

        await self.ensure_collection()
        try:
            self._collection.add(
                ids=[fragment.fragment_id or str(uuid.uuid4())],
                embeddings=[fragment.vector],
                documents=[fragment.text],
                metadatas=[self._fragment_to_metadata(fragment)],
            )
        except Exception as exc:
            raise VectorStoreError(
                message=f"ChromaDB insert failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.debug(
            "chromadb_insert",
            fragment_id=fragment.fragment_id,
            document_id=fragment.document_id,
        )

    async def search(self, query_vector: list[float], limit: int) -> list[RetrievedFragment]:
        """Return up to *limit* fragments, highest dot product first."""
        if limit <= 0:
            return []

        await self.ensure_collection()
        try:
            stored = self._collection.count()
            if stored == 0:
                return []

            results = self._collection.query(
                query_embeddings=[query_vector],
                n_results=min(limit, stored),
                include=["documents", "metadatas", "distances"],
            )

            if not results["documents"] or not results["documents"][0]:
                return []

            ids = results["ids"][0]
            documents = results["documents"][0]
            metadatas = results["metadatas"][0] if results["metadatas"] else [{}] * len(documents)
            distances = results["distances"][0] if results["distances"] else [0.0] * len(documents)

            # ChromaDB's "ip" distance is 1 - dot(a, b).
            retrieved = [
                self._metadata_to_fragment(fragment_id, meta or {}, text, 1.0 - distance)
                for fragment_id, text, meta, distance in zip(
                    ids, documents, metadatas, distances, strict=True
                )
            ]
        except Exception as exc:
            raise VectorStoreError(
                message=f"ChromaDB search failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        retrieved.sort(key=lambda rf: rf.similarity_score, reverse=True)
        logger.info(
            "chromadb_search",
            limit=limit,
            results_count=len(retrieved),
            top_score=retrieved[0].similarity_score if retrieved else None,
        )
        return retrieved

    async def count(self) -> int:
        await self.ensure_collection()
        try:
            return self._collection.count()
        except Exception as exc:
            raise VectorStoreError(
                message=f"ChromaDB count failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

    def get_provider_name(self) -> str:
        return "chromadb"

    def is_available(self) -> bool:
        """Return ``True`` if the ChromaDB collection is open and readable."""
        if self._collection is None:
            return False
        try:
            self._collection.count()
            return True
        except Exception:
            return False

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _fragment_to_metadata(fragment: Fragment) -> dict[str, str]:
        """Convert a Fragment to a ChromaDB-compatible metadata dict.

        ChromaDB metadata values must be scalars, so skills are stored as a
        comma-separated string.
        """
        return {
            "document_id": fragment.document_id,
            "name": fragment.name,
            "role": fragment.role,
            "skills": ",".join(fragment.skills),
        }

    @staticmethod
    def _metadata_to_fragment(
        fragment_id: str, meta: dict[str, Any], text: str, score: float
    ) -> RetrievedFragment:
        """Reverse :meth:`_fragment_to_metadata` into a search hit."""
        return RetrievedFragment(
            fragment_id=fragment_id,
            document_id=meta.get("document_id", ""),
            text=text,
            name=meta.get("name", ""),
            role=meta.get("role", ""),
            skills=ChromaDBProvider._split_tags(meta.get("skills", "")),
            similarity_score=score,
        )

    @staticmethod
    def _split_tags(value: str | Any) -> list[str]:
        """Split a comma-separated tag string back into a list."""
        if not value or not isinstance(value, str):
            return []
        return [tag.strip() for tag in value.split(",") if tag.strip()]
