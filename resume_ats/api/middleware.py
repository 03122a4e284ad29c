"""API middleware -- CORS, request logging, and error handling.

Starlette middleware is a stack (last added, first executed).  ``main.py``
adds ``ErrorHandlingMiddleware`` first and ``RequestLoggingMiddleware``
second, so the logger sees the final status code even when the error
handler replaced an exception with a JSON body:

    Client -> RequestLogging -> ErrorHandling -> route handler
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from resume_ats.api.schemas import ErrorResponse
from resume_ats.utils.errors import ATSError, ValidationFailure
from resume_ats.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Defaults to ``["*"]``; restrict via ``CORS_ALLOWED_ORIGINS`` in production.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Convert ``ATSError`` subclasses that escape a route into JSON.

    ``ValidationFailure`` becomes a 400 whose ``error`` is the validation
    message.  Any other application error becomes a generic 500; its
    details are logged server-side only.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except ValidationFailure as exc:
            _logger.info(
                "validation_failed",
                missing=exc.missing,
                path=str(request.url.path),
            )
            body = ErrorResponse(error=exc.message)
            return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))
        except ATSError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            body = ErrorResponse(error=INTERNAL_ERROR_MESSAGE)
            return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))
