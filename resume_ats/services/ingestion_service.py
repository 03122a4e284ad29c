"""Orchestrator for the résumé ingestion pipeline.

Pipeline stages: **validate -> skills -> extract -> chunk -> embed -> store**.

:class:`IngestionService` coordinates five collaborators (skill extractor,
text extractor, chunker, embedding provider, vector store) without any of
them knowing about each other.  All dependencies are injected via the
constructor so providers can be swapped and tests can use in-memory fakes.

Failure semantics
-----------------
- Missing inputs raise :class:`ValidationFailure` before any external call.
- A skill-lookup or text-extraction failure aborts before anything is stored.
- Chunks are embedded and stored strictly one after another.  A failure at
  chunk *k* propagates and leaves chunks ``1..k-1`` persisted; there is no
  rollback.
"""

from __future__ import annotations

import hashlib
import time
import uuid
from typing import TYPE_CHECKING

import structlog

from resume_ats.models.rag import Fragment, IngestionResult
from resume_ats.services.chunker import TextChunker
from resume_ats.services.skill_extractor import SkillExtractor
from resume_ats.utils.errors import ValidationFailure

if TYPE_CHECKING:
    from resume_ats.interfaces.embedding_provider import IEmbeddingProvider
    from resume_ats.interfaces.text_extractor import ITextExtractor
    from resume_ats.interfaces.vector_store_provider import IVectorStoreProvider

logger = structlog.get_logger(logger_name=__name__)

REQUIRED_FIELDS_MESSAGE = "Resume file, name, role, and GitHub username are required."


class IngestionService:
    """Turns one uploaded résumé into stored, searchable fragments.

    Parameters
    ----------
    skill_extractor:
        Derives skill tags from the candidate's public repositories.
    text_extractor:
        Converts the uploaded document into plain text.
    chunker:
        Splits the text into overlapping, size-bounded chunks.
    embedding_provider:
        Generates one embedding vector per chunk.
    vector_store:
        Persists each embedded chunk as a :class:`Fragment`.
    """

    def __init__(
        self,
        skill_extractor: SkillExtractor,
        text_extractor: ITextExtractor,
        chunker: TextChunker,
        embedding_provider: IEmbeddingProvider,
        vector_store: IVectorStoreProvider,
    ) -> None:
        self._skill_extractor = skill_extractor
        self._text_extractor = text_extractor
        self._chunker = chunker
        self._embedding_provider = embedding_provider
        self._vector_store = vector_store

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def ingest_resume(
        self,
        document: bytes | None,
        name: str | None,
        role: str | None,
        github_username: str | None,
    ) -> IngestionResult:
        """Ingest one résumé and return the skills attached to its fragments.

        Raises
        ------
        ValidationFailure
            If the document or any of the three text fields is missing.
        DependencyFailure
            Any subclass raised by a collaborator; see module docstring for
            what has been persisted at that point.
        """
        self._validate(document, name, role, github_username)

        start = time.monotonic()

        skills = await self._skill_extractor.extract(github_username)
        text = await self._text_extractor.extract_text(document)
        document_id = hashlib.sha256(text.encode("utf-8")).hexdigest()

        chunks = self._chunker.split(text)
        if not chunks:
            logger.warning("resume_no_text", name=name, document_id=document_id[:12])

        stored = 0
        for index, chunk in enumerate(chunks):
            try:
                vector = await self._embedding_provider.embed_single(chunk)
                await self._vector_store.insert(
                    Fragment(
                        fragment_id=str(uuid.uuid4()),
                        document_id=document_id,
                        vector=vector,
                        text=chunk,
                        name=name,
                        role=role,
                        skills=skills,
                    )
                )
            except Exception as exc:
                logger.error(
                    "resume_ingestion_partial",
                    document_id=document_id[:12],
                    failed_chunk=index,
                    stored=stored,
                    total=len(chunks),
                    error_type=type(exc).__name__,
                )
                raise
            stored += 1

        elapsed = round(time.monotonic() - start, 3)
        logger.info(
            "resume_ingested",
            name=name,
            role=role,
            document_id=document_id[:12],
            skills=len(skills),
            fragments=stored,
            elapsed_s=elapsed,
        )
        return IngestionResult(
            skills=skills,
            fragments_stored=stored,
            document_id=document_id,
            ingestion_time=elapsed,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(
        document: bytes | None,
        name: str | None,
        role: str | None,
        github_username: str | None,
    ) -> None:
        missing: list[str] = []
        if not document:
            missing.append("resume")
        if not name or not name.strip():
            missing.append("name")
        if not role or not role.strip():
            missing.append("role")
        if not github_username or not github_username.strip():
            missing.append("githubUsername")

        if missing:
            raise ValidationFailure(
                message=f"{REQUIRED_FIELDS_MESSAGE} Missing: {', '.join(missing)}",
                missing=missing,
            )
