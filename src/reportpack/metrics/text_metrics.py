"""Text-pattern extraction of health check metrics.

Identity fields and check counts come from the first page of the report.
The strengths / opportunities / actions breakdown is rendered as a pie chart
in the PDF, so it is counted from document structure instead, with a fixed
proportional estimate when the counts are missing or implausible.
"""

import logging
import re
from typing import Optional

from reportpack.metrics.patterns import capture_all, compile_patterns, first_capture
from reportpack.models import ReportMetrics
from reportpack.sections import HEADER_ALTERNATION

logger = logging.getLogger(__name__)

PAGE_MARKER = re.compile(r"page\s+1\s+of\s+\d+", re.IGNORECASE)
FIRST_PAGE_CHARS = 3000

LINE_FLAGS = re.IGNORECASE | re.MULTILINE

IDENTITY_FIELDS = [
    (
        "organization",
        compile_patterns(
            r"organi[sz]ation\s*(?:name)?\s*[:\-][ \t]*([^\n]+)",
            r"^[ \t]*org\s*[:\-][ \t]*([^\n]+)",
            flags=LINE_FLAGS,
        ),
    ),
    # Line-anchored: the report title also contains the word "Stack"
    ("stack", compile_patterns(r"^[ \t]*stack\s*(?:name)?\s*:[ \t]*([^\n]+)", flags=LINE_FLAGS)),
    (
        "run_by",
        compile_patterns(
            r"run\s*by\s*[:\-][ \t]*([^\n]+)",
            r"^[ \t]*run\s*by[ \t]+([^\n]+)",
            flags=LINE_FLAGS,
        ),
    ),
    (
        "last_run",
        compile_patterns(
            r"last\s*run\s*(?:on|at|date)?\s*[:\-][ \t]*([^\n]+)",
            r"^[ \t]*last\s*run(?:\s*on)?[ \t]+([^\n]+)",
            flags=LINE_FLAGS,
        ),
    ),
]

TOTAL_CHECKS = compile_patterns(r"(\d+)\s*total\s*checks", r"total\s*checks\s*:[ \t]*(\d+)")
COMBINED_CHECKS = compile_patterns(
    r"(\d{2,})\s*performed\s*checks\s*skipped\s*checks",
    r"performed\s*checks\s*skipped\s*checks\s*(\d{2,})",
)
PERFORMED_CHECKS = compile_patterns(r"(\d+)\s*performed\s*checks", r"performed\s*checks\s*:[ \t]*(\d+)")
SKIPPED_CHECKS = compile_patterns(r"(\d+)\s*skipped\s*checks", r"skipped\s*checks\s*:[ \t]*(\d+)")

BREAKDOWN_HEADERS = {
    "actions_required": r"actions?\s*required",
    "areas_of_opportunities": r"areas?\s*of\s*opportunit(?:y|ies)",
    "strengths": r"strengths?",
}

# Share of performed checks per category when counts cannot be trusted
BREAKDOWN_ESTIMATE_PERCENT = {
    "strengths": 40,
    "areas_of_opportunities": 38,
    "actions_required": 22,
}


def _header_line(alternation: str) -> re.Pattern[str]:
    """A line holding only a header, optionally followed by "(N)" or a colon."""
    return re.compile(
        rf"^[ \t]*(?:{alternation})[ \t]*(?:\(\d+\))?[ \t]*:?[ \t]*$",
        LINE_FLAGS,
    )


BREAKDOWN_HEADER_LINES = {
    category: _header_line(pattern) for category, pattern in BREAKDOWN_HEADERS.items()
}
ANY_HEADER_LINE = _header_line("|".join([HEADER_ALTERNATION, *BREAKDOWN_HEADERS.values()]))
ITEM_LINE = re.compile(r"^[ \t]*(?:[•●▪◦*-][ \t]*)?[A-Z][^\n:]{0,80}:", re.MULTILINE)


def first_page(text: str) -> str:
    """Return the text up through the first "Page 1 of N" marker.

    Falls back to the first 3000 characters when there is no marker.
    """
    marker = PAGE_MARKER.search(text)
    if marker:
        return text[: marker.end()]
    return text[:FIRST_PAGE_CHARS]


def split_check_counts(numeral: str, total_checks: Optional[int]) -> tuple[int, int]:
    """Split a concatenated "performed + skipped" digit string.

    PDF text extraction can glue the two counts together ("372" for 37
    performed and 2 skipped). The first split, by ascending position, whose
    parts add up to ``total_checks`` wins. Without an exact split the last
    digit is taken as skipped, or the last two digits if one digit would make
    performed exceed the total.

    Returns:
        ``(performed, skipped)``
    """
    if len(numeral) < 2:
        return int(numeral), 0

    if total_checks is not None:
        for i in range(1, len(numeral)):
            performed, skipped = int(numeral[:i]), int(numeral[i:])
            if performed + skipped == total_checks:
                return performed, skipped

    performed, skipped = int(numeral[:-1]), int(numeral[-1])
    if total_checks is not None and performed > total_checks and len(numeral) > 2:
        performed, skipped = int(numeral[:-2]), int(numeral[-2:])
    return performed, skipped


def count_breakdown(text: str) -> dict[str, int]:
    """Count strengths / opportunities / actions from section structure.

    Two independent counts are taken per category: how many times its header
    line occurs, and how many capitalized "Label:" item lines appear inside
    its sections (at least one per section). The larger count wins.
    """
    counts = {}
    for category, header in BREAKDOWN_HEADER_LINES.items():
        header_count = 0
        item_count = 0
        for match in header.finditer(text):
            header_count += 1
            body_end = len(text)
            next_header = ANY_HEADER_LINE.search(text, match.end())
            if next_header:
                body_end = next_header.start()
            items = len(ITEM_LINE.findall(text, match.end(), body_end))
            item_count += max(1, items)
        counts[category] = max(header_count, item_count)
    return counts


def estimate_breakdown(
    performed_checks: int, existing: Optional[dict[str, int]] = None
) -> dict[str, int]:
    """Fill unset categories with a fixed share of the performed checks.

    Shares are 40% strengths, 38% opportunities and 22% actions, rounded half
    up. The estimates need not add up to ``performed_checks`` exactly.
    """
    result = dict(existing or {})
    for category, percent in BREAKDOWN_ESTIMATE_PERCENT.items():
        if result.get(category) is None:
            result[category] = (performed_checks * percent + 50) // 100
    return result


def _to_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value is not None else None


def extract_metrics(text: str) -> ReportMetrics:
    """Recover report metrics from normalized (or raw) report text.

    Never raises; fields that cannot be recovered are left unset.
    """
    window = first_page(text)
    values: dict[str, object] = dict(capture_all(window, IDENTITY_FIELDS))

    total = _to_int(first_capture(window, TOTAL_CHECKS))
    performed: Optional[int] = None
    skipped: Optional[int] = None

    combined = first_capture(window, COMBINED_CHECKS)
    if combined is not None:
        performed, skipped = split_check_counts(combined, total)
        logger.debug(f"Split combined checks {combined!r} into {performed}/{skipped}")
    else:
        performed = _to_int(first_capture(window, PERFORMED_CHECKS))
        skipped = _to_int(first_capture(window, SKIPPED_CHECKS))

    breakdown = count_breakdown(text)
    counted = sum(breakdown.values())
    if counted == 0 or (performed is not None and counted > 2 * performed):
        if counted:
            logger.debug(f"Discarding implausible breakdown {breakdown} for {performed} performed checks")
        breakdown = {}
        if performed is not None:
            breakdown = estimate_breakdown(performed, breakdown)

    values.update(
        total_checks=total,
        performed_checks=performed,
        skipped_checks=skipped,
        **breakdown,
    )
    metrics = ReportMetrics(**{k: v for k, v in values.items() if v is not None})
    logger.info(f"Extracted metrics: {metrics.to_dict()}")
    return metrics
