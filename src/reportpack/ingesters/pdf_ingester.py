"""Ingester for PDF reports."""

import logging

import fitz  # PyMuPDF

from reportpack.errors import ExtractionError
from reportpack.utils.filetype import PDF

logger = logging.getLogger(__name__)


class PdfIngester:
    """Extracts text from PDF bytes with PyMuPDF."""

    source_type = "pdf"
    file_types = {PDF, "application/x-pdf"}

    def can_handle(self, file_type: str) -> bool:
        return file_type in self.file_types

    def extract(self, content: bytes) -> str:
        """Return the text of every page, pages separated by blank lines.

        Args:
            content: Raw PDF bytes

        Returns:
            Extracted text (may be empty for scanned documents)
        """
        try:
            with fitz.open(stream=content, filetype="pdf") as doc:
                pages = [page.get_text("text") for page in doc]
        except (RuntimeError, ValueError) as e:
            raise ExtractionError(self.source_type, str(e)) from e

        logger.info(f"Parsed PDF with {len(pages)} pages")
        return "\n\n".join(pages)
