# tests/test_pipeline.py

"""
Pipeline Tests - upload validation, parsing and metrics strategy order
"""

import pytest

from reportpack.config import Settings
from reportpack.errors import EmptyContentError, FileTooLargeError, UnsupportedFileTypeError
from reportpack.models import ParsedReport, ReportMetrics
from reportpack.pipeline import analyze_report, parse_report
from reportpack.utils.filetype import DOCX, PDF, TEXT


class FailingVision:
    def extract(self, content):
        raise RuntimeError("vision service unavailable")


class FixedVision:
    def __init__(self, metrics):
        self.metrics = metrics
        self.calls = 0

    def extract(self, content):
        self.calls += 1
        return self.metrics


def pdf_report(raw_text: str) -> ParsedReport:
    return ParsedReport(id="r1", filename="report.pdf", file_type=PDF, raw_text=raw_text)


class TestParseReport:

    def test_text_upload(self, sample_report_text, settings):
        report = parse_report(sample_report_text.encode(), "report.txt", "text/plain", settings)

        assert report.file_type == TEXT
        assert report.raw_text == sample_report_text
        assert {"Actions Required", "Strengths"} <= {c.section for c in report.chunks}
        assert report.id

    def test_pdf_upload(self, report_pdf, settings):
        report = parse_report(report_pdf, "report.pdf", "application/pdf", settings)

        assert report.file_type == PDF
        assert "Stack: acme" in report.raw_text
        assert "\r" not in report.raw_text
        assert any(c.section == "Actions Required" for c in report.chunks)

    def test_docx_upload_with_generic_mime_type(self, report_docx, settings):
        report = parse_report(report_docx, "report.docx", "application/octet-stream", settings)
        assert report.file_type == DOCX
        assert "Fix A: remove unused webhooks." in report.raw_text

    def test_unsupported_type(self, settings):
        with pytest.raises(UnsupportedFileTypeError, match="setup.exe"):
            parse_report(b"MZ", "setup.exe", "application/x-msdownload", settings)

    def test_too_large(self):
        small = Settings(_env_file=None, MAX_UPLOAD_BYTES=10)
        with pytest.raises(FileTooLargeError) as exc_info:
            parse_report(b"x" * 11, "report.txt", None, small)
        assert exc_info.value.size_bytes == 11

    def test_whitespace_only_document(self, settings):
        with pytest.raises(EmptyContentError):
            parse_report(b"  \n\n\t ", "empty.txt", "text/plain", settings)

    def test_chunk_size_follows_settings(self, settings):
        tuned = Settings(_env_file=None, MAX_CHUNK_SIZE=200, CHUNK_OVERLAP=20)
        text = ("Every webhook is subscribed to publish events on this stack. " * 30).encode()
        report = parse_report(text, "report.txt", None, tuned)
        assert all(len(c.content) <= 200 for c in report.chunks)


class TestAnalyzeReport:

    def test_text_strategy(self, sample_report_text):
        parsed = ParsedReport(id="r1", filename="r.txt", file_type=TEXT, raw_text=sample_report_text)
        assert analyze_report(b"", parsed).stack == "acme"

    def test_vision_preferred_for_pdf(self):
        vision = FixedVision(ReportMetrics(stack="from-vision"))
        metrics = analyze_report(b"%PDF", pdf_report("Stack: from-text"), vision)
        assert metrics.stack == "from-vision"

    def test_empty_vision_falls_back(self):
        vision = FixedVision(ReportMetrics())
        assert analyze_report(b"%PDF", pdf_report("Stack: from-text"), vision).stack == "from-text"

    def test_vision_error_falls_back(self):
        metrics = analyze_report(b"%PDF", pdf_report("Stack: from-text"), FailingVision())
        assert metrics.stack == "from-text"

    def test_vision_skipped_for_non_pdf(self):
        vision = FixedVision(ReportMetrics(stack="from-vision"))
        parsed = ParsedReport(id="r1", filename="r.txt", file_type=TEXT, raw_text="Stack: from-text")
        assert analyze_report(b"", parsed, vision).stack == "from-text"
        assert vision.calls == 0
