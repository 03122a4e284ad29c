"""Résumé evaluation service -- FastAPI application entry point.

Wires together all providers and services via constructor injection, stores
them on ``app.state`` for the routes, provisions the vector collection at
startup, and closes the shared HTTP client on shutdown.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from resume_ats.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from resume_ats.api.routes import router as api_router
from resume_ats.config.settings import Settings
from resume_ats.providers.document.pdf_text_extractor import PDFTextExtractor
from resume_ats.providers.embedding.openai_embedding_provider import OpenAIEmbeddingProvider
from resume_ats.providers.llm.openai_provider import OpenAILLMProvider
from resume_ats.providers.profile.github_provider import GitHubProfileProvider
from resume_ats.providers.vector_store.chromadb_provider import ChromaDBProvider
from resume_ats.services.chunker import TextChunker
from resume_ats.services.ingestion_service import IngestionService
from resume_ats.services.prompt_assembler import PromptAssembler
from resume_ats.services.query_service import QueryService
from resume_ats.services.skill_extractor import SkillExtractor
from resume_ats.utils.errors import ConfigurationError
from resume_ats.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Full DI assembly
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    if app_settings.chunk_overlap >= app_settings.chunk_size:
        raise ConfigurationError(
            message=(
                f"CHUNK_OVERLAP ({app_settings.chunk_overlap}) must be smaller than "
                f"CHUNK_SIZE ({app_settings.chunk_size})"
            )
        )
    if not app_settings.openai_api_key:
        _logger.warning("openai_api_key_missing", message="Embedding and chat calls will fail")

    # -- Providers --
    embedding_provider = OpenAIEmbeddingProvider(settings=app_settings)
    if embedding_provider.get_dimension() != app_settings.vector_dimension:
        raise ConfigurationError(
            message=(
                f"Embedding model produces {embedding_provider.get_dimension()}-dim vectors "
                f"but VECTOR_DIMENSION is {app_settings.vector_dimension}"
            ),
            provider_name=embedding_provider.get_provider_name(),
        )

    # -- Shared resources --
    http_client = httpx.AsyncClient(timeout=30.0)

    llm_provider = OpenAILLMProvider(settings=app_settings)
    profile_provider = GitHubProfileProvider(
        http_client=http_client,
        token=app_settings.get_github_token(),
        base_url=app_settings.github_api_base_url,
    )
    vector_store = ChromaDBProvider(
        persist_directory=app_settings.chromadb_persist_dir,
        collection_name=app_settings.chromadb_collection,
        dimension=app_settings.vector_dimension,
    )
    text_extractor = PDFTextExtractor()

    # -- Services --
    chunker = TextChunker(
        chunk_size=app_settings.chunk_size,
        chunk_overlap=app_settings.chunk_overlap,
    )
    ingestion_service = IngestionService(
        skill_extractor=SkillExtractor(profile_provider=profile_provider),
        text_extractor=text_extractor,
        chunker=chunker,
        embedding_provider=embedding_provider,
        vector_store=vector_store,
    )
    assembler = PromptAssembler(
        embedding_provider=embedding_provider,
        vector_store=vector_store,
        variant=app_settings.evaluation_prompt_variant,
        top_k=app_settings.retrieval_top_k,
    )
    query_service = QueryService(
        assembler=assembler,
        llm=llm_provider,
        temperature=app_settings.generation_temperature,
    )

    return {
        "settings": app_settings,
        "http_client": http_client,
        "embedding_provider": embedding_provider,
        "llm_provider": llm_provider,
        "profile_provider": profile_provider,
        "vector_store": vector_store,
        "text_extractor": text_extractor,
        "ingestion_service": ingestion_service,
        "query_service": query_service,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    components = _build_all(settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    await components["vector_store"].ensure_collection()

    _logger.info(
        "app_startup",
        version=settings.app_version,
        environment=settings.app_env,
        collection=settings.chromadb_collection,
        prompt_variant=settings.evaluation_prompt_variant.value,
        authenticated_profile_lookup=settings.get_github_token() is not None,
    )

    yield

    # -- Shutdown: close shared httpx client --
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="Resume ATS API",
        version=settings.app_version,
        description=(
            "Upload candidate résumés, tag them with skills from their GitHub "
            "repositories, and evaluate them against job descriptions with "
            "retrieval-augmented generation."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=settings.get_cors_origins())

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "resume_ats.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
