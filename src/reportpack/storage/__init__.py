"""Report storage."""

from reportpack.storage.store import ReportStore, StoredReport

__all__ = ["ReportStore", "StoredReport"]
