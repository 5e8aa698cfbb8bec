"""In-memory storage for parsed reports, keyed by session id."""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from reportpack.models import Chunk, ReportMetrics

logger = logging.getLogger(__name__)


@dataclass
class StoredReport:
    """Everything kept about one uploaded report."""

    session_id: str
    filename: str
    raw_text: str
    chunks: list[Chunk]
    metrics: ReportMetrics = field(default_factory=ReportMetrics)
    uploaded_at: datetime = field(default_factory=datetime.now)

    def chunks_in_section(self, section: str = "") -> list[Chunk]:
        """Chunks whose label starts with ``section`` (all chunks when empty)."""
        if not section:
            return list(self.chunks)
        prefix = section.lower()
        return [c for c in self.chunks if c.section.lower().startswith(prefix)]


class ReportStore:
    """Bounded in-memory report store.

    Inserting past ``capacity`` evicts the oldest-inserted session. Not
    thread-safe; the owner serializes access.
    """

    DEFAULT_CAPACITY = 10

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._reports: OrderedDict[str, StoredReport] = OrderedDict()

    def store(self, report: StoredReport) -> None:
        """Insert or replace a report, evicting the oldest if over capacity."""
        self._reports.pop(report.session_id, None)
        self._reports[report.session_id] = report

        while len(self._reports) > self.capacity:
            evicted, _ = self._reports.popitem(last=False)
            logger.info(f"Evicted report session {evicted}")

    def get(self, session_id: str) -> Optional[StoredReport]:
        return self._reports.get(session_id)

    def has(self, session_id: str) -> bool:
        return session_id in self._reports

    def delete(self, session_id: str) -> bool:
        """Remove a session. Returns whether it existed."""
        return self._reports.pop(session_id, None) is not None

    def session_ids(self) -> list[str]:
        """Session ids, oldest first."""
        return list(self._reports)

    def __len__(self) -> int:
        return len(self._reports)
