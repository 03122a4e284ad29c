"""RAG data models for the résumé knowledge base.

Defines Pydantic v2 models for stored résumé fragments, similarity-search
hits, and ingestion summaries.  All models use frozen config so a fragment
cannot be mutated after it has been built by the ingestion pipeline.

Flow overview:
    1. INGESTION: an uploaded résumé is converted to text and split into
       overlapping chunks (see services/chunker.py).
    2. EMBEDDING: each chunk becomes a 1536-dimensional vector.
    3. STORAGE: chunk text + vector + candidate metadata are persisted as a
       :class:`Fragment` in ChromaDB.
    4. RETRIEVAL: at query time the question is embedded and the closest
       fragments come back as :class:`RetrievedFragment` objects, which the
       prompt assembler serialises into the model's context block.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Fragment -- the unit of storage in the vector store.
# ---------------------------------------------------------------------------
class Fragment(BaseModel):
    """One chunk of résumé text with its embedding and candidate metadata.

    Every fragment produced by one ingestion shares ``document_id``,
    ``name``, ``role`` and ``skills``.  Fragments are append-only: nothing
    in the service updates or deletes them.
    """

    model_config = ConfigDict(frozen=True)

    fragment_id: str = Field(description="Unique identifier (UUID) for this fragment.")
    document_id: str = Field(
        description="SHA-256 of the extracted résumé text; shared by sibling fragments."
    )
    vector: list[float] = Field(description="Embedding of ``text``.")
    text: str = Field(min_length=1, description="The chunk's textual content.")
    name: str = Field(description="Candidate name supplied at upload time.")
    role: str = Field(description="Target role supplied at upload time.")
    skills: list[str] = Field(
        default_factory=list,
        description="Primary languages of the candidate's public repositories.",
    )


# ---------------------------------------------------------------------------
# RetrievedFragment -- a search hit from the vector store.
# ---------------------------------------------------------------------------
class RetrievedFragment(BaseModel):
    """A stored fragment returned from a similarity search.

    The vector is not returned.  ``similarity_score`` is the raw dot product
    between the query vector and the stored vector, so it is not bounded to
    ``[0, 1]``; higher is better.
    """

    model_config = ConfigDict(frozen=True)

    fragment_id: str
    document_id: str = ""
    text: str
    name: str = ""
    role: str = ""
    skills: list[str] = Field(default_factory=list)
    similarity_score: float = Field(
        default=0.0,
        description="Dot-product similarity between the query and this fragment.",
    )


# ---------------------------------------------------------------------------
# IngestionResult -- output of one résumé ingestion.
# ---------------------------------------------------------------------------
class IngestionResult(BaseModel):
    """Summary of a single résumé ingestion run.

    Returned by :class:`~resume_ats.services.ingestion_service.IngestionService`
    and used by the upload route (``extractedSkills``) and the CLI.
    """

    model_config = ConfigDict(frozen=True)

    skills: list[str] = Field(
        default_factory=list, description="Skill tags attached to every fragment."
    )
    fragments_stored: int = Field(
        default=0, ge=0, description="Number of fragments embedded and persisted."
    )
    document_id: str = Field(default="", description="Content hash of the résumé text.")
    ingestion_time: float = Field(
        default=0.0,
        ge=0.0,
        description="Wall-clock time in seconds for the ingestion run.",
    )
