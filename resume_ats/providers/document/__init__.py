"""Document text extractors."""

from resume_ats.providers.document.pdf_text_extractor import PDFTextExtractor

__all__ = ["PDFTextExtractor"]
