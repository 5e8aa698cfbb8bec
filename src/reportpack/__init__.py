"""reportpack - parse, chunk and measure CMS stack health check reports."""

from reportpack.chunkers import HealthCheckChunker, chunk
from reportpack.metrics import extract_metadata, extract_metrics, select_metrics
from reportpack.models import Chunk, Citation, ParsedReport, ReportMetrics
from reportpack.sections import classify_section, contains_table
from reportpack.text import normalize

__version__ = "0.1.0"

__all__ = [
    "normalize",
    "classify_section",
    "contains_table",
    "chunk",
    "extract_metrics",
    "extract_metadata",
    "select_metrics",
    "HealthCheckChunker",
    "Chunk",
    "Citation",
    "ParsedReport",
    "ReportMetrics",
]
