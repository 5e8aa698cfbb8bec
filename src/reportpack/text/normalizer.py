"""Canonicalize text extracted from uploaded reports."""

import re

# Unicode space variants that extractors emit in place of a plain space
UNICODE_SPACES = re.compile("[\u00a0\u1680\u180e\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]")
LINE_BREAKS = re.compile(r"\r\n?")
INLINE_WHITESPACE = re.compile(r"[^\S\n]+")
EXCESS_NEWLINES = re.compile(r"\n{3,}")


def normalize(raw_text: str) -> str:
    """Normalize whitespace and line endings while keeping paragraph breaks.

    Args:
        raw_text: Text as produced by a PDF/DOCX/TXT extractor

    Returns:
        Text with single spaces, trimmed lines, ``\\n`` line endings and at
        most one blank line between paragraphs. Empty input yields ``""``.
    """
    if not raw_text:
        return ""

    text = UNICODE_SPACES.sub(" ", raw_text)
    text = LINE_BREAKS.sub("\n", text)
    text = INLINE_WHITESPACE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    # Trimming can empty whole lines, so collapse blank runs afterwards
    text = EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()
