"""PDF text extractor backed by PyMuPDF (fitz).

Reads an uploaded résumé from memory, extracts text page by page and joins
the pages with newlines.  Pages without a text layer contribute nothing, so
a scanned résumé yields an empty string rather than an error.
"""

from __future__ import annotations

import asyncio

import fitz  # PyMuPDF -- the "fitz" import name is a PyMuPDF convention
import structlog

from resume_ats.interfaces.text_extractor import ITextExtractor
from resume_ats.utils.errors import TextExtractionError

logger = structlog.get_logger(logger_name=__name__)


class PDFTextExtractor(ITextExtractor):
    """Extracts plain text from PDF bytes."""

    async def extract_text(self, document: bytes) -> str:
        # PyMuPDF is synchronous; keep the event loop free for other requests.
        return await asyncio.to_thread(self._extract, document)

    def get_provider_name(self) -> str:
        return "pymupdf"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _extract(self, document: bytes) -> str:
        if not document:
            raise TextExtractionError(
                message="Empty document", provider_name=self.get_provider_name()
            )

        try:
            doc = fitz.open(stream=document, filetype="pdf")
        except Exception as exc:
            logger.error("pdf_open_failed", size=len(document), error=str(exc))
            raise TextExtractionError(
                message=f"Could not open PDF: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        pages: list[str] = []
        try:
            for page in doc:
                text = page.get_text("text")
                if text.strip():
                    pages.append(text)
            page_count = len(doc)
        except Exception as exc:
            raise TextExtractionError(
                message=f"Could not read PDF text: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        finally:
            doc.close()

        if not pages:
            logger.warning("pdf_no_text_extracted", pages=page_count)

        text = "\n".join(pages)
        logger.info("pdf_text_extracted", pages=page_count, characters=len(text))
        return text
