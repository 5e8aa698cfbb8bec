"""Data models for reportpack."""

from reportpack.models.document import (
    Chunk,
    Citation,
    ParsedReport,
    ReportMetrics,
    make_chunk_id,
)

__all__ = ["Chunk", "Citation", "ParsedReport", "ReportMetrics", "make_chunk_id"]
