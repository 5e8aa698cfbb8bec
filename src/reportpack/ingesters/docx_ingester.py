"""Ingester for Word reports."""

import io
import logging
import zipfile

import docx
from docx.opc.exceptions import PackageNotFoundError

from reportpack.errors import ExtractionError
from reportpack.utils.filetype import DOC, DOCX

logger = logging.getLogger(__name__)


class DocxIngester:
    """Extracts paragraph and table text from Word documents with python-docx.

    Legacy binary ``.doc`` files are accepted by type but only readable when
    they are really OOXML packages; otherwise extraction fails cleanly.
    """

    source_type = "docx"
    file_types = {DOCX, DOC}

    def can_handle(self, file_type: str) -> bool:
        return file_type in self.file_types

    def extract(self, content: bytes) -> str:
        try:
            document = docx.Document(io.BytesIO(content))
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
            raise ExtractionError(self.source_type, str(e) or type(e).__name__) from e

        lines = [paragraph.text for paragraph in document.paragraphs]

        # Tables keep one row per line, cells separated by spaces
        for table in document.tables:
            lines.append("")
            for row in table.rows:
                lines.append(" ".join(cell.text.strip() for cell in row.cells))

        text = "\n".join(lines)
        logger.info(f"Extracted {len(text)} characters from Word document")
        return text
