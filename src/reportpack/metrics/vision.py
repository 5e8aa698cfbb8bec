"""Vision-based metrics extraction and the policy for combining strategies."""

import base64
import json
import logging
import re
from typing import Callable, Optional

import fitz  # PyMuPDF

from reportpack.models import ReportMetrics
from reportpack.protocols import VisionGenerator

logger = logging.getLogger(__name__)

VISION_PROMPT = """You are reading the first page of a CMS stack health check report.
The page shows the organization, the stack, who ran the report and when, the
total / performed / skipped check counts, and a pie chart with the number of
Strengths, Areas of Opportunities and Actions Required.

Respond with ONLY a JSON object using these keys, omitting any value you
cannot read with certainty:
{"organization": str, "stack": str, "runBy": str, "lastRun": str,
 "totalChecks": int, "performedChecks": int, "skippedChecks": int,
 "strengths": int, "areasOfOpportunities": int, "actionsRequired": int}
"""

JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def render_pages(content: bytes, pages: int = 1, dpi: int = 150) -> list[str]:
    """Render the first pages of a PDF to base64-encoded PNG images."""
    images = []
    with fitz.open(stream=content, filetype="pdf") as doc:
        for page in doc.pages(0, min(pages, doc.page_count)):
            pixmap = page.get_pixmap(dpi=dpi)
            images.append(base64.b64encode(pixmap.tobytes("png")).decode("ascii"))
    return images


def parse_metrics_response(text: str) -> ReportMetrics:
    """Parse the JSON object in a model response into metrics.

    Markdown code fences and surrounding prose are tolerated. Anything that
    is not a JSON object yields empty metrics.
    """
    match = JSON_OBJECT.search(text or "")
    if not match:
        return ReportMetrics()
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.warning("Vision response is not valid JSON")
        return ReportMetrics()
    if not isinstance(data, dict):
        return ReportMetrics()
    return ReportMetrics.from_dict(data)


class VisionMetricsExtractor:
    """Reads metrics off rendered PDF pages with a vision-capable model.

    The pie-chart breakdown is only available this way; the text strategy
    has to count or estimate it.
    """

    def __init__(self, generator: VisionGenerator, pages: int = 1, dpi: int = 150):
        self.generator = generator
        self.pages = pages
        self.dpi = dpi

    def extract(self, content: bytes) -> ReportMetrics:
        """Extract metrics from PDF bytes.

        Returns empty metrics when rendering or the model call fails, so the
        caller can fall back to text extraction.
        """
        try:
            images = render_pages(content, self.pages, self.dpi)
        except (RuntimeError, ValueError) as e:
            logger.warning(f"Could not render PDF for vision extraction: {e}")
            return ReportMetrics()

        for number, image in enumerate(images, 1):
            result = self.generator.analyze_image(VISION_PROMPT, image, "image/png")
            if not result.success:
                logger.warning(f"Vision extraction failed on page {number}: {result.error}")
                continue
            metrics = parse_metrics_response(result.text)
            if not metrics.is_empty():
                logger.info(f"Vision-extracted metrics: {metrics.to_dict()}")
                return metrics

        return ReportMetrics()


def select_metrics(
    vision: Optional[ReportMetrics], text_fallback: Callable[[], ReportMetrics]
) -> ReportMetrics:
    """Prefer vision metrics; otherwise use the text strategy's whole result.

    There is no per-field merge: a non-empty vision result is used as is.
    """
    if vision is not None and not vision.is_empty():
        return vision
    logger.info("Vision metrics unavailable, using text extraction")
    return text_fallback()
