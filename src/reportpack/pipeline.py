"""Upload pipeline: validate, extract, normalize, chunk, measure."""

import logging
import uuid
from typing import Optional

from reportpack.chunkers import HealthCheckChunker
from reportpack.config import Settings, get_settings
from reportpack.errors import EmptyContentError, FileTooLargeError, UnsupportedFileTypeError
from reportpack.ingesters import get_ingester
from reportpack.metrics import VisionMetricsExtractor, extract_metrics, select_metrics
from reportpack.models import ParsedReport, ReportMetrics
from reportpack.text import normalize
from reportpack.utils import is_allowed_file, resolve_file_type
from reportpack.utils.filetype import PDF

logger = logging.getLogger(__name__)


def parse_report(
    content: bytes,
    filename: str,
    mime_type: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> ParsedReport:
    """Turn uploaded bytes into a normalized, chunked report.

    Args:
        content: Raw file bytes
        filename: Original file name, used to resolve the type
        mime_type: Declared MIME type, if any
        settings: Limits and chunking parameters (defaults to the environment)

    Returns:
        ParsedReport with normalized text and chunks

    Raises:
        UnsupportedFileTypeError: if the file is not a PDF, Word or text document
        FileTooLargeError: if the file exceeds MAX_UPLOAD_BYTES
        ExtractionError: if the document cannot be read
        EmptyContentError: if no text is left after normalization
    """
    settings = settings or get_settings()
    logger.info(f"File received: {filename}, type: {mime_type}, size: {len(content)} bytes")

    if not is_allowed_file(filename, mime_type):
        raise UnsupportedFileTypeError(filename, mime_type)
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise FileTooLargeError(len(content), settings.MAX_UPLOAD_BYTES)

    file_type = resolve_file_type(filename, mime_type, content)
    ingester = get_ingester(file_type)
    raw_text = normalize(ingester.extract(content))
    if not raw_text:
        raise EmptyContentError(filename)

    chunker = HealthCheckChunker(settings.MAX_CHUNK_SIZE, settings.CHUNK_OVERLAP)
    report = ParsedReport(
        id=str(uuid.uuid4()),
        filename=filename,
        file_type=file_type,
        raw_text=raw_text,
        chunks=chunker.chunk(raw_text),
    )
    logger.info(f"Processed {filename}: {len(raw_text)} characters, {len(report.chunks)} chunks")
    return report


def analyze_report(
    content: bytes,
    parsed: ParsedReport,
    vision_extractor: Optional[VisionMetricsExtractor] = None,
) -> ReportMetrics:
    """Recover metrics, trying the vision strategy first for PDFs.

    Any vision failure falls back to text extraction over the normalized text.
    """
    vision = None
    if vision_extractor is not None and parsed.file_type == PDF:
        try:
            vision = vision_extractor.extract(content)
        except Exception as e:
            logger.warning(f"Vision extraction failed, falling back to text: {e}")

    return select_metrics(vision, lambda: extract_metrics(parsed.raw_text))
