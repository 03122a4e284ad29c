"""Utility modules for the résumé evaluation service.

- **errors** -- Exception hierarchy rooted at ATSError; every external
  collaborator failure is a DependencyFailure subclass so callers can decide
  between aborting and degrading.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from resume_ats.utils.errors import (
    ATSError,
    ConfigurationError,
    DependencyFailure,
    EmbeddingError,
    LLMError,
    ProfileLookupError,
    RetrievalDegradation,
    TextExtractionError,
    ValidationFailure,
    VectorStoreError,
)
from resume_ats.utils.logging import configure_logging, get_logger

__all__ = [
    "ATSError",
    "ConfigurationError",
    "DependencyFailure",
    "EmbeddingError",
    "LLMError",
    "ProfileLookupError",
    "RetrievalDegradation",
    "TextExtractionError",
    "ValidationFailure",
    "VectorStoreError",
    "configure_logging",
    "get_logger",
]
