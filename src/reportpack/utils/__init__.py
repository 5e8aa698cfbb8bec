"""Utility functions for reportpack."""

from reportpack.utils.filetype import is_allowed_file, resolve_file_type, sniff_file_type

__all__ = ["is_allowed_file", "resolve_file_type", "sniff_file_type"]
