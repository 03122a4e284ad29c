"""Abstract base class for document-to-text extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: PDFTextExtractor (resume_ats/providers/document/)
class ITextExtractor(ABC):
    """Contract for converting an uploaded résumé into plain text."""

    @abstractmethod
    async def extract_text(self, document: bytes) -> str:
        """Return the document's text, pages joined by newlines.

        An image-only document yields an empty string rather than an error.

        Raises
        ------
        resume_ats.utils.errors.TextExtractionError
            If the bytes cannot be parsed as a document.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier, e.g. ``"pymupdf"``."""
