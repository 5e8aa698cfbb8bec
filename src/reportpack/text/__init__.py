"""Text normalization."""

from reportpack.text.normalizer import normalize

__all__ = ["normalize"]
