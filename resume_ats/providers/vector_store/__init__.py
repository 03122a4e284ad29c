"""Vector store provider adapters."""

from resume_ats.providers.vector_store.chromadb_provider import ChromaDBProvider

__all__ = ["ChromaDBProvider"]
