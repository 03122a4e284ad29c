"""Custom exception hierarchy for the résumé evaluation service.

All application exceptions inherit from :class:`ATSError`, which carries an
optional ``provider_name`` so error handlers can identify which external
service (e.g. "openai", "github", "chromadb") caused the failure.

    ATSError  (base -- catch-all for any application error)
    +-- ValidationFailure        (missing upload fields / document)
    +-- ConfigurationError       (startup / missing config)
    +-- DependencyFailure        (any external collaborator failed)
        +-- ProfileLookupError   (GitHub repository listing)
        +-- TextExtractionError  (PDF -> text)
        +-- EmbeddingError       (embedding API)
        +-- VectorStoreError     (insert / similarity search)
        +-- LLMError             (chat completion)
        +-- RetrievalDegradation (query-time retrieval, non-fatal)

``ValidationFailure`` is reported to the caller with its message.  Every
``DependencyFailure`` is fatal for the enclosing request except
``RetrievalDegradation``, which the prompt assembler catches and turns into
an empty context block.
"""


class ATSError(Exception):
    """Base exception for all application errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  ``__str__`` prefixes the provider name in brackets, e.g.
    ``[openai] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Caller / configuration errors
# ---------------------------------------------------------------------------


class ValidationFailure(ATSError):
    """Raised when required ingestion inputs are missing.

    ``missing`` lists the request field names that were absent so the HTTP
    layer can report an actionable message.
    """

    def __init__(
        self,
        message: str = "Required input is missing",
        missing: list[str] | None = None,
    ) -> None:
        super().__init__(message=message)
        self._missing = list(missing or [])

    @property
    def missing(self) -> list[str]:
        return list(self._missing)


class ConfigurationError(ATSError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External collaborator errors
# ---------------------------------------------------------------------------


class DependencyFailure(ATSError):
    """Raised when an external collaborator errors, times out, or returns
    an unusable response."""

    def __init__(
        self,
        message: str = "External dependency failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProfileLookupError(DependencyFailure):
    """Raised when the repository listing for a profile cannot be fetched."""

    def __init__(
        self,
        message: str = "Profile lookup failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class TextExtractionError(DependencyFailure):
    """Raised when a résumé document cannot be converted to text."""

    def __init__(
        self,
        message: str = "Document text extraction failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EmbeddingError(DependencyFailure):
    """Raised when the embedding API call fails or returns no vector."""

    def __init__(
        self,
        message: str = "Embedding request failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class VectorStoreError(DependencyFailure):
    """Raised when a vector-store insert, search, or provisioning fails."""

    def __init__(
        self,
        message: str = "Vector store operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class LLMError(DependencyFailure):
    """Raised when an LLM API call fails or returns an empty response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RetrievalDegradation(DependencyFailure):
    """Query-time retrieval failed; the request continues without context."""

    def __init__(
        self,
        message: str = "Retrieval failed; continuing with empty context",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
