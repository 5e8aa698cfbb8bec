"""Ordered regex tables that capture labeled values from report text."""

import re
from typing import Optional, Sequence

FieldTable = Sequence[tuple[str, Sequence[re.Pattern[str]]]]


def compile_patterns(*patterns: str, flags: int = re.IGNORECASE) -> list[re.Pattern[str]]:
    return [re.compile(p, flags) for p in patterns]


def first_capture(text: str, patterns: Sequence[re.Pattern[str]]) -> Optional[str]:
    """Return the first non-blank capture of the first matching pattern."""
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return None


def capture_all(text: str, table: FieldTable) -> dict[str, str]:
    """Run every labeled pattern list against text; unmatched labels are left out."""
    results = {}
    for label, patterns in table:
        value = first_capture(text, patterns)
        if value is not None:
            results[label] = value
    return results
