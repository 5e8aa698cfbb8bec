"""Chunk retrieval."""

from reportpack.retrieval.index import ChunkIndex, cosine_similarity, excerpt

__all__ = ["ChunkIndex", "cosine_similarity", "excerpt"]
