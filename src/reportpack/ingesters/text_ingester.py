"""Ingester for plain-text reports."""


class TextIngester:
    """Decodes bytes as UTF-8, replacing undecodable sequences."""

    source_type = "text"

    def can_handle(self, file_type: str) -> bool:
        return file_type.startswith("text/")

    def extract(self, content: bytes) -> str:
        # Drop a UTF-8 byte order mark if present
        return content.decode("utf-8-sig", errors="replace")
