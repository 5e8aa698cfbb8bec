"""Byte-to-text extractors (ingesters) for uploaded reports."""

import logging

from reportpack.ingesters.docx_ingester import DocxIngester
from reportpack.ingesters.pdf_ingester import PdfIngester
from reportpack.ingesters.text_ingester import TextIngester
from reportpack.protocols import Ingester

logger = logging.getLogger(__name__)

_DEFAULT_INGESTER = TextIngester()

# Registry of available ingesters
_INGESTERS: list[Ingester] = [
    PdfIngester(),
    DocxIngester(),
    _DEFAULT_INGESTER,
]


def get_ingester(file_type: str) -> Ingester:
    """Find an ingester for the given MIME type.

    Unknown types are decoded as text.

    Args:
        file_type: Effective MIME type of the upload

    Returns:
        An Ingester instance that can handle the type
    """
    for ingester in _INGESTERS:
        if ingester.can_handle(file_type):
            return ingester
    logger.info(f"Unknown file type {file_type}, attempting text parse")
    return _DEFAULT_INGESTER


def register_ingester(ingester: Ingester) -> None:
    """Register a custom ingester ahead of the built-in ones.

    Args:
        ingester: An object implementing the Ingester protocol
    """
    _INGESTERS.insert(0, ingester)


__all__ = ["get_ingester", "register_ingester", "PdfIngester", "DocxIngester", "TextIngester"]
