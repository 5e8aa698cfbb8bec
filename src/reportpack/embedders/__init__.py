"""Embedding providers for chunk retrieval."""

from reportpack.embedders.sentence_transformer import SentenceTransformerEmbedder

__all__ = ["SentenceTransformerEmbedder"]
