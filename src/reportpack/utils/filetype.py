"""File type resolution for uploaded reports."""

from pathlib import Path
from typing import Optional

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC = "application/msword"
TEXT = "text/plain"

# Extension -> canonical MIME type
EXTENSION_TYPES = {
    ".pdf": PDF,
    ".docx": DOCX,
    ".doc": DOC,
    ".txt": TEXT,
}

ALLOWED_MIME_TYPES = {
    PDF,
    DOCX,
    DOC,
    TEXT,
    "application/x-pdf",
    "application/octet-stream",
}

PDF_MAGIC = b"%PDF"
ZIP_MAGIC = b"PK\x03\x04"


def file_extension(filename: str) -> str:
    return Path(filename).suffix.lower()


def is_allowed_file(filename: str, mime_type: Optional[str] = None) -> bool:
    """Accept a file by extension, or failing that by declared MIME type."""
    if file_extension(filename) in EXTENSION_TYPES:
        return True
    return mime_type in ALLOWED_MIME_TYPES


def sniff_file_type(content: bytes) -> Optional[str]:
    """Guess the type from leading magic bytes (PDF and DOCX zip containers)."""
    if content.startswith(PDF_MAGIC):
        return PDF
    if content.startswith(ZIP_MAGIC):
        return DOCX
    return None


def resolve_file_type(
    filename: str, mime_type: Optional[str] = None, content: bytes = b""
) -> str:
    """Determine the effective MIME type of an upload.

    The extension wins over the declared MIME type, since browsers often send
    ``application/octet-stream``. Generic or missing types fall back to
    content sniffing, then to plain text.
    """
    by_extension = EXTENSION_TYPES.get(file_extension(filename))
    if by_extension:
        return by_extension

    if mime_type == "application/x-pdf":
        return PDF
    if mime_type and mime_type != "application/octet-stream":
        return mime_type

    return sniff_file_type(content) or mime_type or TEXT
