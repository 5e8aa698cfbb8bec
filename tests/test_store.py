# tests/test_store.py

"""
Report Store Tests - bounded in-memory sessions
"""

import pytest

from reportpack.chunkers import chunk
from reportpack.storage import ReportStore, StoredReport


def stored(session_id: str, text: str = "Actions Required\nFix A: rotate tokens now.") -> StoredReport:
    return StoredReport(session_id=session_id, filename=f"{session_id}.txt", raw_text=text, chunks=chunk(text))


class TestReportStore:

    def test_store_and_get(self):
        store = ReportStore()
        report = stored("a")
        store.store(report)

        assert store.get("a") is report
        assert store.has("a")
        assert len(store) == 1
        assert store.get("missing") is None

    def test_oldest_inserted_is_evicted(self):
        store = ReportStore(capacity=2)
        for session_id in ("a", "b", "c"):
            store.store(stored(session_id))

        assert store.session_ids() == ["b", "c"]
        assert not store.has("a")

    def test_reinserting_refreshes_position(self):
        store = ReportStore(capacity=2)
        store.store(stored("a"))
        store.store(stored("b"))
        store.store(stored("a"))
        store.store(stored("c"))

        assert store.session_ids() == ["a", "c"]

    def test_delete(self):
        store = ReportStore()
        store.store(stored("a"))
        assert store.delete("a") is True
        assert store.delete("a") is False
        assert len(store) == 0

    def test_stores_are_independent(self):
        first, second = ReportStore(), ReportStore()
        first.store(stored("a"))
        assert not second.has("a")

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            ReportStore(capacity=0)


class TestStoredReport:

    def test_chunks_in_section(self):
        text = "Actions Required\nFix A: rotate tokens now.\n\nStrengths\nGood B: consistent naming."
        report = stored("a", text)

        assert [c.section for c in report.chunks_in_section("strengths")] == ["Strengths"]
        assert len(report.chunks_in_section()) == 2
        assert report.chunks_in_section("Webhooks") == []
