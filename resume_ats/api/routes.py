"""FastAPI route definitions for the résumé evaluation API.

ENDPOINT MAP:
    /upload-resume   POST   Multipart résumé upload -> skills + stored fragments
    /query           POST   Conversation -> single-line evaluation report
    /health          GET    Liveness + provider status

Dependencies are resolved from ``app.state`` (populated at startup in
``main.py``) via FastAPI's ``Depends`` using the ``Annotated`` pattern.

Failure bodies are deliberately generic.  Validation errors propagate to
``ErrorHandlingMiddleware`` (400 with the specific message); every other
failure is logged here with its details and answered with a fixed 500 body.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from resume_ats.api.middleware import INTERNAL_ERROR_MESSAGE
from resume_ats.api.schemas import (
    ErrorResponse,
    HealthResponse,
    QueryRequest,
    QueryResponse,
    UploadFailedResponse,
    UploadResumeResponse,
)
from resume_ats.services.ingestion_service import IngestionService
from resume_ats.services.query_service import QueryService
from resume_ats.utils.errors import ValidationFailure
from resume_ats.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Dependency helpers
# ---------------------------------------------------------------------------


def _get_ingestion_service(request: Request) -> IngestionService:
    return request.app.state.ingestion_service


def _get_query_service(request: Request) -> QueryService:
    return request.app.state.query_service


IngestionDep = Annotated[IngestionService, Depends(_get_ingestion_service)]
QueryDep = Annotated[QueryService, Depends(_get_query_service)]


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post(
    "/upload-resume",
    response_model=UploadResumeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": UploadFailedResponse}},
    summary="Upload a résumé and store it as searchable fragments",
)
async def upload_resume(
    ingestion: IngestionDep,
    resume: Annotated[UploadFile | None, File()] = None,
    name: Annotated[str | None, Form()] = None,
    role: Annotated[str | None, Form()] = None,
    github_username: Annotated[str | None, Form(alias="githubUsername")] = None,
) -> UploadResumeResponse | JSONResponse:
    """Extract skills and text from the résumé, then embed and store its chunks."""
    document = await resume.read() if resume is not None else None

    try:
        result = await ingestion.ingest_resume(
            document=document,
            name=name,
            role=role,
            github_username=github_username,
        )
    except ValidationFailure:
        raise
    except Exception as exc:
        _logger.error(
            "resume_upload_failed",
            error_type=type(exc).__name__,
            error=str(exc),
            filename=resume.filename if resume is not None else None,
        )
        return JSONResponse(status_code=500, content=UploadFailedResponse().model_dump())

    return UploadResumeResponse(extracted_skills=result.skills)


@router.post(
    "/query",
    response_model=QueryResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Evaluate stored résumés against the latest question",
)
async def query(body: QueryRequest, query_service: QueryDep) -> QueryResponse | JSONResponse:
    """Answer the last turn of the conversation using retrieved résumé fragments."""
    try:
        reply = await query_service.answer(body.messages)
    except Exception as exc:
        _logger.error(
            "query_failed",
            error_type=type(exc).__name__,
            error=str(exc),
            turns=len(body.messages),
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=INTERNAL_ERROR_MESSAGE).model_dump(exclude_none=True),
        )

    return QueryResponse(response=reply)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Application health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Return liveness, version, and provider availability."""
    providers: dict[str, Any] = {}
    for key in ("embedding_provider", "llm_provider", "profile_provider", "vector_store"):
        provider = getattr(request.app.state, key, None)
        if provider is None:
            continue
        providers[key] = {
            "name": provider.get_provider_name(),
            "available": provider.is_available(),
        }

    vector_store = getattr(request.app.state, "vector_store", None)
    if vector_store is not None and vector_store.is_available():
        try:
            providers["vector_store"]["fragments"] = await vector_store.count()
        except Exception as exc:
            _logger.warning("health_count_failed", error=str(exc))

    settings = getattr(request.app.state, "settings", None)
    return HealthResponse(
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.app_version if settings is not None else "0.1.0",
        providers=providers,
    )
