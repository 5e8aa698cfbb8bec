"""Section taxonomy and table detection for health check reports.

The taxonomy is an ordered table of ``(label, patterns)`` pairs. Declaration
order is the tie-break: the first label with a matching pattern wins, so more
specific sections (e.g. Content Modelling) are listed before generic ones
(e.g. Entries, Assets) whose patterns would also match.
"""

import re
from typing import Iterable, Optional, Sequence, TypeVar

GENERAL = "General"
CLASSIFY_WINDOW = 300

T = TypeVar("T")


def _compile(*patterns: str) -> list[re.Pattern[str]]:
    return [re.compile(p, re.IGNORECASE) for p in patterns]


SECTION_PATTERNS: list[tuple[str, list[re.Pattern[str]]]] = [
    ("Content Modelling", _compile(r"content\s*modelling", r"content\s*modeling", r"content\s*model")),
    ("Actions Required", _compile(r"actions?\s*required", r"action\s*items")),
    (
        "Content Types",
        _compile(
            r"content\s*types?\s*title",
            r"rarely\s*used\s*content\s*types",
            r"unused\s*content\s*types",
        ),
    ),
    ("Global Fields", _compile(r"global\s*fields", r"unused\s*global\s*fields")),
    ("Areas of Opportunities", _compile(r"areas?\s*of\s*opportunit")),
    ("Strengths", _compile(r"\bstrengths?\b")),
    (
        "Naming Standards",
        _compile(
            r"naming\s*standards",
            r"naming\s*convention",
            r"recommendation\s*message",
            r"recommended\s*title",
        ),
    ),
    ("Validation Rules", _compile(r"validation\s*rules", r"field\s*name")),
    ("Descriptions", _compile(r"descriptions?:", r"content\s*types.*description")),
    ("Entries", _compile(r"entries", r"entry\s*count")),
    ("Assets", _compile(r"assets?", r"media")),
    ("Workflows", _compile(r"workflows?", r"publishing")),
    ("Webhooks", _compile(r"webhooks?")),
    ("Extensions", _compile(r"extensions?", r"custom\s*fields?")),
    ("Users & Roles", _compile(r"users?\s*(&|and)\s*roles?", r"permissions?")),
    ("Security", _compile(r"security", r"api\s*keys?", r"tokens?")),
    ("Performance", _compile(r"performance", r"optimization")),
    ("Recommendations", _compile(r"recommendations?", r"suggestions?")),
    ("Stack Overview", _compile(r"stack\s*overview", r"stack\s*info", r"stack\s*details")),
    ("Locales", _compile(r"locales?", r"languages?")),
    ("Environments", _compile(r"environments?", r"branches?")),
]

SECTION_LABELS: list[str] = [label for label, _ in SECTION_PATTERNS] + [GENERAL]

# Headers that open a major report section when they start a line
MAJOR_SECTION_HEADERS: list[str] = [
    r"Content\s*Modelling",
    r"Actions\s*Required",
    r"Areas\s*of\s*Opportunities",
    r"Strengths",
    r"Global\s*Fields",
    r"Naming\s*Standards",
    r"Validation\s*Rules",
    r"Stack\s*Overview",
    r"Security",
    r"Performance",
    r"Recommendations",
    r"Entries",
    r"Assets",
    r"Workflows",
    r"Webhooks",
    r"Extensions",
    r"Users",
    r"Locales",
    r"Environments",
]
HEADER_ALTERNATION = "|".join(MAJOR_SECTION_HEADERS)

TABLE_CAPTION = re.compile(r"displaying\s+\d+\s+(?:of\s+)?\d+\s*records?", re.IGNORECASE)
TABLE_HEADERS = re.compile(
    r"content\s*types?\s*title|created\s*on|field\s*name|recommendation",
    re.IGNORECASE,
)


def first_match(
    text: str,
    table: Iterable[tuple[T, Sequence[re.Pattern[str]]]],
    default: Optional[T] = None,
) -> Optional[T]:
    """Return the key of the first entry whose patterns match ``text``.

    Entries and their patterns are tried in order; the first hit wins.
    """
    for key, patterns in table:
        for pattern in patterns:
            if pattern.search(text):
                return key
    return default


def classify_section(snippet: str) -> str:
    """Map a text snippet to one section label.

    Only the first 300 characters are inspected. Returns ``"General"`` when
    no pattern matches.
    """
    window = snippet[:CLASSIFY_WINDOW].lower()
    return first_match(window, SECTION_PATTERNS, GENERAL)


def contains_table(snippet: str) -> bool:
    """Heuristically decide whether a span holds tabular report data."""
    return bool(TABLE_CAPTION.search(snippet) or TABLE_HEADERS.search(snippet))
