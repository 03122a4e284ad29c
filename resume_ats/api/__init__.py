"""Résumé evaluation API layer -- routes, schemas, and middleware."""

from resume_ats.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from resume_ats.api.routes import router
from resume_ats.api.schemas import (
    ErrorResponse,
    HealthResponse,
    QueryRequest,
    QueryResponse,
    UploadFailedResponse,
    UploadResumeResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "ErrorResponse",
    "HealthResponse",
    "QueryRequest",
    "QueryResponse",
    "UploadFailedResponse",
    "UploadResumeResponse",
]
