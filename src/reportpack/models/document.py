"""Core data models for reports, chunks and metrics."""

import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Optional

# Namespace for deterministic chunk ids
CHUNK_NAMESPACE = uuid.UUID("6f1c2b8e-4d3a-5e7f-9a0b-1c2d3e4f5a6b")

TABLE_DATA_SUFFIX = " - Table Data"


def make_chunk_id(chunk_index: int, start_char: int, content: str) -> str:
    """Derive a stable id so that chunking the same text twice yields equal chunks."""
    return str(uuid.uuid5(CHUNK_NAMESPACE, f"{chunk_index}:{start_char}:{content}"))


@dataclass(frozen=True)
class Chunk:
    """A labeled span of a normalized report."""

    id: str
    content: str
    section: str
    chunk_index: int
    start_char: int
    end_char: int

    @property
    def is_table(self) -> bool:
        return self.section.endswith(TABLE_DATA_SUFFIX)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "section": self.section,
            "chunkIndex": self.chunk_index,
            "startChar": self.start_char,
            "endChar": self.end_char,
        }


# snake_case attribute -> camelCase key used by dashboards and prompts
_METRIC_KEYS = {
    "organization": "organization",
    "stack": "stack",
    "run_by": "runBy",
    "last_run": "lastRun",
    "total_checks": "totalChecks",
    "performed_checks": "performedChecks",
    "skipped_checks": "skippedChecks",
    "actions_required": "actionsRequired",
    "areas_of_opportunities": "areasOfOpportunities",
    "strengths": "strengths",
}

_INT_METRICS = {
    "total_checks",
    "performed_checks",
    "skipped_checks",
    "actions_required",
    "areas_of_opportunities",
    "strengths",
}


@dataclass(frozen=True)
class ReportMetrics:
    """Best-effort metrics recovered from a health check report.

    Every field is optional; an unset field means the value could not be
    recovered, not that it is zero.
    """

    organization: Optional[str] = None
    stack: Optional[str] = None
    run_by: Optional[str] = None
    last_run: Optional[str] = None
    total_checks: Optional[int] = None
    performed_checks: Optional[int] = None
    skipped_checks: Optional[int] = None
    actions_required: Optional[int] = None
    areas_of_opportunities: Optional[int] = None
    strengths: Optional[int] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> dict[str, Any]:
        """Return set fields keyed by their camelCase names."""
        result = {}
        for attr, key in _METRIC_KEYS.items():
            value = getattr(self, attr)
            if value is not None:
                result[key] = value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReportMetrics":
        """Build metrics from a loosely-typed mapping (e.g. parsed LLM JSON).

        Accepts camelCase or snake_case keys. Numeric fields accept ints or
        digit strings; anything else is ignored.
        """
        values: dict[str, Any] = {}
        for attr, key in _METRIC_KEYS.items():
            raw = data.get(key, data.get(attr))
            if raw is None:
                continue
            if attr in _INT_METRICS:
                number = _coerce_int(raw)
                if number is not None:
                    values[attr] = number
            else:
                text = str(raw).strip()
                if text:
                    values[attr] = text
        return cls(**values)


def _coerce_int(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    if isinstance(raw, float) and raw.is_integer() and raw >= 0:
        return int(raw)
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    return None


@dataclass
class ParsedReport:
    """A report after extraction, normalization and chunking."""

    id: str
    filename: str
    file_type: str
    raw_text: str
    chunks: list[Chunk] = field(default_factory=list)
    uploaded_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class Citation:
    """A chunk cited as evidence for an answer."""

    chunk_id: str
    section: str
    excerpt: str
    relevance_score: float
