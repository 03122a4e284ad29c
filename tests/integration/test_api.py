"""Integration tests for the HTTP endpoints using TestClient.

The app is assembled from the real routes, middleware and services; only
the external collaborators (GitHub, OpenAI, ChromaDB) are in-memory fakes.
"""

from __future__ import annotations

import io

import fitz
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from conftest import (
    FakeEmbeddingProvider,
    FakeLLMProvider,
    FakeProfileProvider,
    InMemoryVectorStore,
)
from resume_ats.api.middleware import ErrorHandlingMiddleware
from resume_ats.api.routes import router as api_router
from resume_ats.config.settings import Settings
from resume_ats.models.profile import RepositoryRecord
from resume_ats.providers.document.pdf_text_extractor import PDFTextExtractor
from resume_ats.services.chunker import TextChunker
from resume_ats.services.ingestion_service import IngestionService
from resume_ats.services.prompt_assembler import PromptAssembler
from resume_ats.services.query_service import QueryService
from resume_ats.services.skill_extractor import SkillExtractor
from resume_ats.utils.errors import LLMError, ProfileLookupError

_FORM = {"name": "Jane Doe", "role": "Backend Engineer", "githubUsername": "janedoe"}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resume_pdf() -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    lines = [
        "Jane Doe",
        "jane.doe@example.com | +1 555 0100",
        "Backend engineer, six years of Python and Go on AWS.",
        "Senior Software Engineer, Acme Corp (2020-2024).",
        "Owned the payments API and mentored four engineers.",
    ]
    for i, line in enumerate(lines):
        page.insert_text((72, 72 + 18 * i), line)
    data = doc.tobytes()
    doc.close()
    return data


def _create_test_app(
    profile_provider: FakeProfileProvider | None = None,
    vector_store: InMemoryVectorStore | None = None,
    llm_provider: FakeLLMProvider | None = None,
) -> tuple[FastAPI, dict]:
    app = FastAPI()
    app.add_middleware(ErrorHandlingMiddleware)
    app.include_router(api_router)

    profile = profile_provider or FakeProfileProvider(
        repos=[
            RepositoryRecord(name="payments-api", language="Python"),
            RepositoryRecord(name="ingest", language="Go"),
            RepositoryRecord(name="notes", language=None),
        ]
    )
    store = vector_store or InMemoryVectorStore()
    embedder = FakeEmbeddingProvider()
    llm = llm_provider or FakeLLMProvider(reply="Match Score: 88%\nRecommendation: Advance")

    app.state.settings = Settings(_env_file=None, app_version="9.9.9")
    app.state.embedding_provider = embedder
    app.state.llm_provider = llm
    app.state.profile_provider = profile
    app.state.vector_store = store
    app.state.ingestion_service = IngestionService(
        skill_extractor=SkillExtractor(profile),
        text_extractor=PDFTextExtractor(),
        chunker=TextChunker(chunk_size=120, chunk_overlap=20),
        embedding_provider=embedder,
        vector_store=store,
    )
    app.state.query_service = QueryService(
        assembler=PromptAssembler(embedder, store),
        llm=llm,
    )

    fakes = {"profile": profile, "store": store, "embedder": embedder, "llm": llm}
    return app, fakes


@pytest.fixture
def test_app():
    app, fakes = _create_test_app()
    return TestClient(app), fakes


def _upload(client: TestClient, data: dict | None = None, pdf: bytes | None = None):
    files = {"resume": ("resume.pdf", io.BytesIO(pdf or _resume_pdf()), "application/pdf")}
    return client.post("/upload-resume", data=data if data is not None else _FORM, files=files)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestUploadResume:
    """Tests for POST /upload-resume."""

    def test_upload_success(self, test_app) -> None:
        client, fakes = test_app

        response = _upload(client)

        assert response.status_code == 200
        assert response.json() == {
            "status": "success",
            "message": "Resume uploaded and stored successfully.",
            "extractedSkills": ["Python", "Go"],
        }
        stored = fakes["store"].fragments
        assert len(stored) >= 2
        assert all(f.name == "Jane Doe" and f.skills == ["Python", "Go"] for f in stored)
        assert any("jane.doe@example.com" in f.text for f in stored)
        assert fakes["profile"].calls == ["janedoe"]

    def test_missing_username(self, test_app) -> None:
        client, fakes = test_app

        response = _upload(client, data={"name": "Jane Doe", "role": "Backend Engineer"})

        assert response.status_code == 400
        assert response.json() == {
            "error": "Resume file, name, role, and GitHub username are required. "
            "Missing: githubUsername"
        }
        assert fakes["profile"].calls == []
        assert fakes["store"].fragments == []

    def test_missing_file(self, test_app) -> None:
        client, fakes = test_app

        response = client.post("/upload-resume", data=_FORM)

        assert response.status_code == 400
        assert response.json()["error"].endswith("Missing: resume")
        assert fakes["profile"].calls == []

    def test_unknown_github_user(self) -> None:
        profile = FakeProfileProvider(
            error=ProfileLookupError(message="GitHub returned 404", provider_name="github")
        )
        app, fakes = _create_test_app(profile_provider=profile)
        client = TestClient(app)

        response = _upload(client)

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": "Failed to upload resume."}
        assert fakes["store"].fragments == []

    def test_corrupt_pdf(self, test_app) -> None:
        client, fakes = test_app

        response = _upload(client, pdf=b"definitely not a pdf")

        assert response.status_code == 500
        assert response.json()["status"] == "error"
        assert fakes["store"].fragments == []

    def test_store_failure_mid_upload(self) -> None:
        store = InMemoryVectorStore(fail_on_insert=2)
        app, _ = _create_test_app(vector_store=store)
        client = TestClient(app)

        response = _upload(client)

        assert response.status_code == 500
        assert len(store.fragments) == 1


class TestQuery:
    """Tests for POST /query."""

    def test_query_after_upload(self, test_app) -> None:
        client, fakes = test_app
        assert _upload(client).status_code == 200

        response = client.post(
            "/query",
            json={"messages": [{"role": "user", "content": "Python backend engineer"}]},
        )

        assert response.status_code == 200
        assert response.json() == {"response": "Match Score: 88% Recommendation: Advance"}

        [(messages, temperature)] = fakes["llm"].requests
        assert temperature == 0.7
        assert messages[0]["role"] == "system"
        assert "jane.doe@example.com" in messages[0]["content"]
        assert messages[-1] == {"role": "user", "content": "Python backend engineer"}

    def test_empty_conversation(self, test_app) -> None:
        client, fakes = test_app

        response = client.post("/query", json={"messages": []})

        assert response.status_code == 200
        assert fakes["embedder"].calls == []

    def test_search_failure_still_answers(self) -> None:
        app, fakes = _create_test_app(vector_store=InMemoryVectorStore(fail_search=True))
        client = TestClient(app)

        response = client.post(
            "/query", json={"messages": [{"role": "user", "content": "Go developer"}]}
        )

        assert response.status_code == 200
        assert "START CONTEXT\n\nEND CONTEXT" in fakes["llm"].requests[0][0][0]["content"]

    def test_llm_failure(self) -> None:
        llm = FakeLLMProvider(error=LLMError(message="rate limited", provider_name="openai"))
        app, _ = _create_test_app(llm_provider=llm)
        client = TestClient(app)

        response = client.post(
            "/query", json={"messages": [{"role": "user", "content": "Go developer"}]}
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, test_app) -> None:
        client, _ = test_app
        assert _upload(client).status_code == 200

        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "Server is Running"
        assert data["version"] == "9.9.9"
        assert data["providers"]["llm_provider"] == {"name": "fake-llm", "available": True}
        assert data["providers"]["vector_store"]["fragments"] >= 2
