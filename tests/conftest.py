# tests/conftest.py

"""
Pytest Fixtures - Shared report documents and test doubles
"""

import io

import docx
import fitz
import numpy as np
import pytest

from reportpack.config import Settings


SAMPLE_REPORT = (
    "Stack Overview\nStack: acme\nPage 1 of 5\n\n"
    "Actions Required\nFix A: description text that is long enough.\n\n"
    "Strengths\nGood config: description text that is long enough."
)


# =============================================================================
# DOCUMENT BUILDERS
# =============================================================================

def build_pdf(*pages: str) -> bytes:
    """Build a PDF with one page per string, text drawn line by line."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


def build_docx(paragraphs: list[str], table: list[list[str]] | None = None) -> bytes:
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    if table:
        grid = document.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                grid.cell(r, c).text = value
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


# =============================================================================
# TEST DOUBLES
# =============================================================================

class KeywordEmbedder:
    """Bag-of-words embedder over a fixed vocabulary."""

    VOCABULARY = ["security", "token", "webhook", "asset", "entry", "locale"]

    @property
    def model_name(self) -> str:
        return "keyword-test"

    def embed(self, texts: list[str]) -> np.ndarray:
        rows = []
        for text in texts:
            lowered = text.lower()
            rows.append([lowered.count(word) for word in self.VOCABULARY])
        return np.array(rows, dtype=np.float32)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def sample_report_text():
    return SAMPLE_REPORT


@pytest.fixture
def settings():
    """Settings isolated from the developer's environment."""
    return Settings(_env_file=None, GEMINI_API_KEY=None)


@pytest.fixture
def embedder():
    return KeywordEmbedder()


@pytest.fixture
def report_pdf():
    return build_pdf(
        "Stack Overview\nStack: acme\nOrganization: Acme Corp\n"
        "39 Total Checks\n37 Performed Checks\n2 Skipped Checks\nPage 1 of 2",
        "Actions Required\nFix A: rotate management tokens.",
    )


@pytest.fixture
def report_docx():
    return build_docx(
        ["Stack Overview", "Stack: acme", "Actions Required", "Fix A: remove unused webhooks."],
        table=[["Field Name", "Recommendation"], ["title", "Add validation"]],
    )
