"""Exception types raised by the ingest pipeline and configuration layer.

Chunking and metrics extraction never raise; they degrade output instead.
"""


class ReportPackError(Exception):
    """Base class for reportpack errors."""


class EmptyContentError(ReportPackError):
    """Normalization produced no usable text."""

    def __init__(self, filename: str = ""):
        self.filename = filename
        target = f" from {filename}" if filename else ""
        super().__init__(f"No text content could be extracted{target}")


class UnsupportedFileTypeError(ReportPackError):
    """The uploaded file is not a PDF, DOC, DOCX or TXT document."""

    def __init__(self, filename: str, file_type: str | None = None):
        self.filename = filename
        self.file_type = file_type
        super().__init__(
            f"Invalid file type for {filename} ({file_type or 'unknown'}). "
            "Please upload a PDF, DOC, DOCX, or TXT file."
        )


class FileTooLargeError(ReportPackError):
    """The uploaded file exceeds the configured size limit."""

    def __init__(self, size_bytes: int, limit_bytes: int):
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"File too large ({size_bytes} bytes). "
            f"Maximum size is {limit_bytes // (1024 * 1024)}MB"
        )


class ExtractionError(ReportPackError):
    """Byte-to-text extraction failed for a supported file type."""

    def __init__(self, source_type: str, reason: str):
        self.source_type = source_type
        self.reason = reason
        super().__init__(f"Failed to parse {source_type.upper()} file: {reason}")


class ConfigurationError(ReportPackError):
    """A required setting is missing or invalid."""
