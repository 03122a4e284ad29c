"""Shared pytest fixtures for the résumé evaluation test suite."""

from __future__ import annotations

import hashlib
import struct

import pytest

from resume_ats.interfaces.embedding_provider import IEmbeddingProvider
from resume_ats.interfaces.llm_provider import ILLMProvider
from resume_ats.interfaces.profile_provider import IProfileProvider
from resume_ats.interfaces.text_extractor import ITextExtractor
from resume_ats.interfaces.vector_store_provider import IVectorStoreProvider
from resume_ats.models.profile import RepositoryRecord
from resume_ats.models.rag import Fragment, RetrievedFragment
from resume_ats.utils.errors import EmbeddingError, VectorStoreError

EMBEDDING_DIM = 1536

JANE_DOE_RESUME = (
    "Jane Doe\n"
    "jane.doe@example.com | +1 555 0100\n\n"
    "Backend engineer with six years of experience building Python and Go "
    "services on AWS. Designed event-driven pipelines with Kafka and "
    "PostgreSQL, and led the migration of a monolith to containerised "
    "microservices on Kubernetes.\n\n"
    "Experience\n"
    "Senior Software Engineer, Acme Corp (2020-2024). Owned the payments "
    "API, cut p99 latency by 40% and mentored four engineers. Built CI/CD "
    "with GitHub Actions and Terraform.\n\n"
    "Software Engineer, Initech (2018-2020). Wrote data ingestion jobs in "
    "Python, maintained REST APIs in Flask and improved test coverage from "
    "45% to 85%.\n\n"
    "Education\n"
    "B.Sc. Computer Science, State University, 2018."
)


# ---------------------------------------------------------------------------
# Deterministic vectors
# ---------------------------------------------------------------------------


def hash_to_vector(text: str, dim: int = EMBEDDING_DIM) -> list[float]:
    """Generate a deterministic unit-length vector by hashing *text*."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    raw = digest
    while len(raw) < dim * 4:
        raw += hashlib.sha256(raw).digest()
    raw = raw[: dim * 4]
    # Map each 4-byte word into [-1, 1) to avoid NaN/inf bit patterns.
    values = [(word / 2**31) - 1.0 for word in struct.unpack(f"<{dim}I", raw)]
    magnitude = max(sum(v * v for v in values) ** 0.5, 1e-10)
    return [v / magnitude for v in values]


# ---------------------------------------------------------------------------
# In-memory fakes
# ---------------------------------------------------------------------------


class FakeEmbeddingProvider(IEmbeddingProvider):
    """Deterministic embedder; ``fail_on_call`` makes the n-th call (1-based) fail."""

    def __init__(self, fail_on_call: int | None = None, fail_always: bool = False) -> None:
        self.calls: list[str] = []
        self._fail_on_call = fail_on_call
        self._fail_always = fail_always

    async def embed_single(self, text: str) -> list[float]:
        if not text:
            raise ValueError("Cannot embed empty text")
        self.calls.append(text)
        if self._fail_always or len(self.calls) == self._fail_on_call:
            raise EmbeddingError(message="embedding service down", provider_name="fake")
        return hash_to_vector(text)

    def get_dimension(self) -> int:
        return EMBEDDING_DIM

    def get_provider_name(self) -> str:
        return "fake-embedding"

    def is_available(self) -> bool:
        return True


class InMemoryVectorStore(IVectorStoreProvider):
    """List-backed store ranking by dot product.

    ``fail_on_insert`` makes the n-th insert (1-based) raise;
    ``fail_search`` makes every search raise.
    """

    def __init__(self, fail_on_insert: int | None = None, fail_search: bool = False) -> None:
        self.fragments: list[Fragment] = []
        self.ensure_calls = 0
        self.search_calls: list[int] = []
        self._insert_attempts = 0
        self._fail_on_insert = fail_on_insert
        self._fail_search = fail_search

    async def ensure_collection(self) -> None:
        self.ensure_calls += 1

    async def insert(self, fragment: Fragment) -> None:
        if len(fragment.vector) != EMBEDDING_DIM:
            raise ValueError("vector dimension mismatch")
        self._insert_attempts += 1
        if self._insert_attempts == self._fail_on_insert:
            raise VectorStoreError(message="insert failed", provider_name="memory")
        self.fragments.append(fragment)

    async def search(self, query_vector: list[float], limit: int) -> list[RetrievedFragment]:
        self.search_calls.append(limit)
        if self._fail_search:
            raise VectorStoreError(message="search failed", provider_name="memory")
        scored = [
            (sum(a * b for a, b in zip(query_vector, f.vector, strict=True)), f)
            for f in self.fragments
        ]
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [
            RetrievedFragment(
                fragment_id=f.fragment_id,
                document_id=f.document_id,
                text=f.text,
                name=f.name,
                role=f.role,
                skills=f.skills,
                similarity_score=score,
            )
            for score, f in scored[:limit]
        ]

    async def count(self) -> int:
        return len(self.fragments)

    def get_provider_name(self) -> str:
        return "memory"

    def is_available(self) -> bool:
        return True


class FakeProfileProvider(IProfileProvider):
    def __init__(
        self,
        repos: list[RepositoryRecord] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.repos = repos or []
        self.error = error
        self.calls: list[str] = []

    async def list_repositories(self, username: str) -> list[RepositoryRecord]:
        self.calls.append(username)
        if self.error is not None:
            raise self.error
        return list(self.repos)

    def get_provider_name(self) -> str:
        return "fake-github"

    def is_available(self) -> bool:
        return True


class FakeTextExtractor(ITextExtractor):
    def __init__(self, text: str = JANE_DOE_RESUME, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls = 0

    async def extract_text(self, document: bytes) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text

    def get_provider_name(self) -> str:
        return "fake-pdf"


class FakeLLMProvider(ILLMProvider):
    """Records every request and returns ``reply`` (or raises ``error``)."""

    def __init__(self, reply: str = "Match Score: 85%", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.requests: list[tuple[list[dict[str, str]], float]] = []

    async def complete(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.7,
    ) -> str:
        self.requests.append((messages, temperature))
        if self.error is not None:
            raise self.error
        return self.reply

    def get_provider_name(self) -> str:
        return "fake-llm"

    def is_available(self) -> bool:
        return True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def embedding_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def vector_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def profile_provider() -> FakeProfileProvider:
    """Repositories in Python, Go, null, Python, TypeScript order."""
    return FakeProfileProvider(
        repos=[
            RepositoryRecord(name="payments-api", language="Python"),
            RepositoryRecord(name="ingest", language="Go"),
            RepositoryRecord(name="dotfiles", language=None),
            RepositoryRecord(name="scripts", language="Python"),
            RepositoryRecord(name="dashboard", language="TypeScript"),
        ]
    )


@pytest.fixture
def text_extractor() -> FakeTextExtractor:
    return FakeTextExtractor()


@pytest.fixture
def llm_provider() -> FakeLLMProvider:
    return FakeLLMProvider()
