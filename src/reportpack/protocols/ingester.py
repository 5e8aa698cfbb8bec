"""Protocol for byte-to-text extractors."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Ingester(Protocol):
    """Protocol for byte-to-text extractors.

    Implementations handle one family of document formats (PDF, Word, text).
    Uses structural subtyping - no inheritance required.
    """

    @property
    def source_type(self) -> str:
        """Return identifier for this source type (e.g., 'pdf', 'docx')."""
        ...

    def can_handle(self, file_type: str) -> bool:
        """Check if this ingester can extract the given MIME type."""
        ...

    def extract(self, content: bytes) -> str:
        """Return the raw text of the document.

        Raises ExtractionError when the bytes cannot be read.
        """
        ...
