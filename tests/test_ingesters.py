# tests/test_ingesters.py

"""
Ingester and File Type Tests - byte-to-text extraction and type resolution
"""

import pytest

from reportpack.errors import ExtractionError
from reportpack.ingesters import DocxIngester, PdfIngester, TextIngester, get_ingester, register_ingester
from reportpack.ingesters import _INGESTERS
from reportpack.protocols import Ingester
from reportpack.utils import is_allowed_file, resolve_file_type, sniff_file_type
from reportpack.utils.filetype import DOC, DOCX, PDF, TEXT


class TestResolveFileType:

    @pytest.mark.parametrize(
        "filename,mime_type,expected",
        [
            ("report.pdf", None, PDF),
            ("REPORT.PDF", "application/octet-stream", PDF),
            ("report.docx", None, DOCX),
            ("report.doc", None, DOC),
            ("notes.txt", "application/octet-stream", TEXT),
            ("report", "application/x-pdf", PDF),
            ("report", "text/markdown", "text/markdown"),
        ],
    )
    def test_by_name_and_declared_type(self, filename, mime_type, expected):
        assert resolve_file_type(filename, mime_type) == expected

    def test_sniffs_generic_uploads(self):
        assert resolve_file_type("upload", "application/octet-stream", b"%PDF-1.7 ...") == PDF
        assert resolve_file_type("upload", None, b"PK\x03\x04rest") == DOCX
        assert resolve_file_type("upload", None, b"plain words") == TEXT

    def test_sniff_unknown(self):
        assert sniff_file_type(b"GIF89a") is None


class TestIsAllowedFile:

    def test_allowed(self):
        assert is_allowed_file("report.pdf")
        assert is_allowed_file("report.bin", "application/pdf")

    def test_rejected(self):
        assert not is_allowed_file("setup.exe", "application/x-msdownload")
        assert not is_allowed_file("image.png")


class TestGetIngester:

    def test_dispatch(self):
        assert isinstance(get_ingester(PDF), PdfIngester)
        assert isinstance(get_ingester(DOCX), DocxIngester)
        assert isinstance(get_ingester(DOC), DocxIngester)
        assert isinstance(get_ingester(TEXT), TextIngester)

    def test_unknown_type_is_read_as_text(self):
        assert isinstance(get_ingester("application/unknown"), TextIngester)

    def test_register_custom_ingester(self, monkeypatch):
        class UpperIngester:
            source_type = "upper"

            def can_handle(self, file_type):
                return file_type == "text/x-upper"

            def extract(self, content):
                return content.decode().upper()

        monkeypatch.setattr("reportpack.ingesters._INGESTERS", list(_INGESTERS))
        custom = UpperIngester()
        register_ingester(custom)
        assert get_ingester("text/x-upper") is custom

    @pytest.mark.parametrize("ingester", [PdfIngester(), DocxIngester(), TextIngester()])
    def test_protocol(self, ingester):
        assert isinstance(ingester, Ingester)


class TestPdfIngester:

    def test_extracts_every_page(self, report_pdf):
        text = PdfIngester().extract(report_pdf)
        assert "Stack: acme" in text
        assert "Fix A: rotate management tokens." in text

    def test_invalid_bytes(self):
        with pytest.raises(ExtractionError, match="Failed to parse PDF file"):
            PdfIngester().extract(b"this is not a pdf")


class TestDocxIngester:

    def test_paragraphs_and_tables(self, report_docx):
        text = DocxIngester().extract(report_docx)
        assert "Stack Overview\nStack: acme" in text
        assert "Field Name Recommendation" in text
        assert "title Add validation" in text

    def test_legacy_binary_doc_fails_cleanly(self):
        with pytest.raises(ExtractionError, match="Failed to parse DOCX file"):
            DocxIngester().extract(b"\xd0\xcf\x11\xe0 legacy word file")


class TestTextIngester:

    def test_utf8_with_bom_and_bad_bytes(self):
        assert TextIngester().extract(b"\xef\xbb\xbfhello\xff") == "hello\ufffd"
