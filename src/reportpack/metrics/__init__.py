"""Metrics and metadata extraction."""

from reportpack.metrics.report_metadata import extract_metadata
from reportpack.metrics.text_metrics import (
    count_breakdown,
    estimate_breakdown,
    extract_metrics,
    first_page,
    split_check_counts,
)
from reportpack.metrics.vision import VisionMetricsExtractor, parse_metrics_response, select_metrics

__all__ = [
    "extract_metrics",
    "extract_metadata",
    "count_breakdown",
    "estimate_breakdown",
    "first_page",
    "split_check_counts",
    "VisionMetricsExtractor",
    "parse_metrics_response",
    "select_metrics",
]
