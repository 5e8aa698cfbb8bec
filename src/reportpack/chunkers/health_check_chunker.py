"""Section-aware chunking strategy for health check reports."""

import logging
import re
from typing import Optional

from reportpack.models import Chunk, make_chunk_id
from reportpack.models.document import TABLE_DATA_SUFFIX
from reportpack.sections import GENERAL, HEADER_ALTERNATION, classify_section, contains_table

logger = logging.getLogger(__name__)

SECTION_BOUNDARY = re.compile(rf"\n(?=(?:{HEADER_ALTERNATION})\b)", re.IGNORECASE)
BULLET_BOUNDARY = re.compile(r"\n(?=[•●▪◦]\s*[A-Z][a-z])")
PARAGRAPH_BOUNDARY = re.compile(r"\n\n+")
TABLE_START = re.compile(r"displaying\s+\d+", re.IGNORECASE)

# Preferred cut points for oversized sections, best first
BREAK_POINTS = ("\n\n", ". ", "\n", ", ")


def _split_at(text: str, boundary: re.Pattern[str]) -> list[tuple[int, str]]:
    """Split text at boundary matches, keeping each segment's source offset.

    Whitespace-only segments are dropped.
    """
    segments = []
    start = 0
    for match in boundary.finditer(text):
        segments.append((start, text[start : match.start()]))
        start = match.end()
    segments.append((start, text[start:]))
    return [(offset, segment) for offset, segment in segments if segment.strip()]


class HealthCheckChunker:
    """Split a normalized report into labeled chunks.

    Segments the text by major section headers (falling back to bullets and
    then paragraphs), labels each segment, and splits oversized segments:
    - Tables are kept together, split by rows only past 2x the size limit
    - Other text is windowed with overlap, cutting on natural boundaries
    - Fragments shorter than MIN_CHUNK_SIZE are dropped

    Offsets always refer to positions in the text passed to ``chunk``.
    """

    MAX_CHUNK_SIZE = 1500
    OVERLAP = 200
    MIN_CHUNK_SIZE = 20
    MIN_PREAMBLE_SIZE = 50

    def __init__(self, max_chunk_size: int = MAX_CHUNK_SIZE, overlap: int = OVERLAP):
        if max_chunk_size < 1:
            raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
        if overlap < 0:
            raise ValueError(f"overlap must not be negative, got {overlap}")
        self.max_chunk_size = max_chunk_size
        self.overlap = overlap

    def chunk(self, text: str) -> list[Chunk]:
        """Split normalized text into ordered, labeled chunks.

        Args:
            text: Normalized report text

        Returns:
            Chunks with strictly increasing ``chunk_index`` starting at 0.
            Non-empty input always yields at least one chunk.
        """
        if not text or not text.strip():
            return []

        chunks: list[Chunk] = []

        for offset, segment in self._segment(text):
            trimmed = segment.strip()
            if len(trimmed) < self.MIN_CHUNK_SIZE:
                continue

            base = offset + len(segment) - len(segment.lstrip())
            section = classify_section(trimmed)

            if len(trimmed) <= self.max_chunk_size:
                self._emit(chunks, trimmed, section, base, base + len(trimmed))
            elif contains_table(trimmed):
                self._split_table_section(chunks, trimmed, section, base)
            else:
                self._split_window(chunks, trimmed, section, base)

        if not chunks:
            # Nothing survived filtering: keep the head of the document
            content = text.strip()[: self.max_chunk_size * 2]
            start = len(text) - len(text.lstrip())
            chunks.append(
                Chunk(
                    id=make_chunk_id(0, start, content),
                    content=content,
                    section=GENERAL,
                    chunk_index=0,
                    start_char=start,
                    end_char=start + len(content),
                )
            )
            logger.debug("No chunk survived filtering, using fallback chunk")

        logger.info(f"Created {len(chunks)} chunks")
        return chunks

    def _segment(self, text: str) -> list[tuple[int, str]]:
        """Pick the first segmentation strategy that yields 2+ segments."""
        sections = _split_at(text, SECTION_BOUNDARY)
        if len(sections) > 1:
            logger.debug(f"Split into {len(sections)} main sections")
            return sections

        bullets = _split_at(text, BULLET_BOUNDARY)
        if len(bullets) > 1:
            logger.debug(f"Split into {len(bullets)} bullet sections")
            return bullets

        paragraphs = _split_at(text, PARAGRAPH_BOUNDARY)
        logger.debug(f"Split into {len(paragraphs)} paragraphs")
        return paragraphs

    def _emit(
        self, chunks: list[Chunk], content: str, section: str, start: int, end: int
    ) -> None:
        if len(content) < self.MIN_CHUNK_SIZE:
            return
        index = len(chunks)
        chunks.append(
            Chunk(
                id=make_chunk_id(index, start, content),
                content=content,
                section=section,
                chunk_index=index,
                start_char=start,
                end_char=end,
            )
        )

    def _split_table_section(
        self, chunks: list[Chunk], text: str, section: str, base: int
    ) -> None:
        """Separate the lead-in text from the table body.

        The body is labeled ``"<section> - Table Data"`` and kept whole unless
        it exceeds twice the size limit.
        """
        caption = TABLE_START.search(text)
        if caption is None:
            self._split_window(chunks, text, section, base)
            return

        before = text[: caption.start()].rstrip()
        if len(before) > self.MIN_PREAMBLE_SIZE:
            if len(before) > self.max_chunk_size:
                self._split_window(chunks, before, section, base)
            else:
                self._emit(chunks, before, section, base, base + len(before))

        table = text[caption.start() :]
        table_start = base + caption.start()
        label = section + TABLE_DATA_SUFFIX

        if len(table) > self.max_chunk_size * 2:
            self._split_table_rows(chunks, table, label, table_start)
        else:
            self._emit(chunks, table, label, table_start, table_start + len(table))

    def _split_table_rows(
        self, chunks: list[Chunk], table: str, label: str, table_start: int
    ) -> None:
        """Split a large table by rows, repeating its caption line in every part.

        Parts collect whole rows up to the size limit. Blank lines are skipped,
        and a row too long to share a part with the caption is windowed on its
        own. Part offsets span the first through last row the part carries.
        """
        caption, _, body = table.partition("\n")
        if len(caption) > self.max_chunk_size // 2:
            # No room to repeat the caption
            self._split_window(chunks, table, label, table_start)
            return

        row_limit = max(1, self.max_chunk_size - len(caption) - 1)
        rows: list[tuple[int, str]] = []
        size = len(caption)
        position = table_start + len(caption) + 1

        for line in body.split("\n"):
            row = line.strip()
            offset = position + len(line) - len(line.lstrip())
            position += len(line) + 1
            if not row:
                continue

            if len(row) > row_limit:
                self._emit_rows(chunks, caption, rows, label)
                rows, size = [], len(caption)
                self._split_window(chunks, row, label, offset, size=row_limit, prefix=caption + "\n")
                continue

            if rows and size + len(row) + 1 > self.max_chunk_size:
                self._emit_rows(chunks, caption, rows, label)
                rows, size = [], len(caption)

            rows.append((offset, row))
            size += len(row) + 1

        self._emit_rows(chunks, caption, rows, label)

    def _emit_rows(
        self, chunks: list[Chunk], caption: str, rows: list[tuple[int, str]], label: str
    ) -> None:
        if not rows:
            return
        content = "\n".join([caption, *(row for _, row in rows)])
        last_offset, last_row = rows[-1]
        self._emit(chunks, content, label, rows[0][0], last_offset + len(last_row))

    def _split_window(
        self,
        chunks: list[Chunk],
        text: str,
        section: str,
        base: int,
        size: Optional[int] = None,
        prefix: str = "",
    ) -> None:
        """Slide a size-limited window over text, overlapping adjacent parts.

        ``prefix`` is prepended to every part; offsets still refer to ``text``.
        """
        size = size or self.max_chunk_size
        length = len(text)
        start = 0

        while start < length:
            end = min(start + size, length)
            if end < length:
                end = start + self._find_break(text[start:end])

            piece = text[start:end]
            content = piece.strip()
            if content:
                lead = len(piece) - len(piece.lstrip())
                first = base + start + lead
                self._emit(chunks, prefix + content, section, first, first + len(content))

            if end >= length:
                break

            # Always advance, even when the overlap would reach back past start
            next_start = end - self.overlap
            start = next_start if next_start > start else end

    @staticmethod
    def _find_break(window: str) -> int:
        """Return the cut length for a window, preferring natural boundaries.

        Only boundaries in the last two-thirds of the window are considered.
        """
        floor = len(window) / 3
        for separator in BREAK_POINTS:
            index = window.rfind(separator)
            if index > floor:
                return index + 1
        return len(window)


def chunk(text: str, max_chunk_size: int = 1500, overlap: int = 200) -> list[Chunk]:
    """Chunk normalized report text with a default-configured chunker."""
    return HealthCheckChunker(max_chunk_size, overlap).chunk(text)
