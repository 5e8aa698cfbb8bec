"""Chunking strategies for report text."""

from reportpack.chunkers.health_check_chunker import HealthCheckChunker, chunk

__all__ = ["HealthCheckChunker", "chunk"]
