"""Section classification and table detection."""

from reportpack.sections.classifier import (
    GENERAL,
    HEADER_ALTERNATION,
    MAJOR_SECTION_HEADERS,
    SECTION_LABELS,
    SECTION_PATTERNS,
    classify_section,
    contains_table,
    first_match,
)

__all__ = [
    "GENERAL",
    "HEADER_ALTERNATION",
    "MAJOR_SECTION_HEADERS",
    "SECTION_LABELS",
    "SECTION_PATTERNS",
    "classify_section",
    "contains_table",
    "first_match",
]
