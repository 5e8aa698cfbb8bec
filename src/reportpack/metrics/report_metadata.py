"""Stack identity fields and content totals found anywhere in a report."""

import re

from reportpack.metrics.patterns import capture_all, compile_patterns

_LINE = re.IGNORECASE | re.MULTILINE

METADATA_FIELDS = [
    ("stackName", compile_patterns(r"stack\s*name\s*[:\-][ \t]*([^\n,]+)", r"^[ \t]*stack\s*:[ \t]*([^\n,]+)", flags=_LINE)),
    ("stackUid", compile_patterns(r"stack\s*uid\s*[: \t][ \t]*([^\s,]+)")),
    ("apiKey", compile_patterns(r"api\s*key\s*[: \t][ \t]*([^\s,]+)")),
    ("reportDate", compile_patterns(r"(?:generated|created|date)\s*(?:on)?\s*:[ \t]*([^\n]+)")),
    ("environment", compile_patterns(r"environment\s*:[ \t]*([^\n,]+)")),
    ("region", compile_patterns(r"region\s*:[ \t]*([^\n,]+)")),
    ("organization", compile_patterns(r"organi[sz]ation\s*:[ \t]*([^\n,]+)")),
    ("totalContentTypes", compile_patterns(r"(?:total\s+)?content\s*types?\s*:[ \t]*(\d+)")),
    ("totalEntries", compile_patterns(r"(?:total\s+)?entries\s*:[ \t]*(\d+)")),
    ("totalAssets", compile_patterns(r"(?:total\s+)?assets\s*:[ \t]*(\d+)")),
    ("totalGlobalFields", compile_patterns(r"(?:total\s+)?global\s*fields\s*:[ \t]*(\d+)")),
    ("pageCount", compile_patterns(r"page\s+\d+\s+of\s+(\d+)")),
]


def extract_metadata(text: str) -> dict[str, str]:
    """Collect stack identity fields and totals as plain strings.

    Keys are only present when one of their patterns matched.
    """
    return capture_all(text, METADATA_FIELDS)
