"""Semantic search over the chunks of one report."""

import logging
from typing import Optional

import numpy as np

from reportpack.models import Chunk, Citation
from reportpack.protocols import EmbeddingProvider

logger = logging.getLogger(__name__)

EXCERPT_CHARS = 200


def excerpt(text: str, limit: int = EXCERPT_CHARS) -> str:
    """Single-line preview of at most ``limit`` characters."""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: limit - 3].rstrip() + "..."


def cosine_similarity(matrix: np.ndarray, vector: np.ndarray) -> np.ndarray:
    """Cosine similarity of each row of ``matrix`` against ``vector``.

    Zero-norm rows score 0.
    """
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(vector)
    dots = matrix @ vector
    with np.errstate(divide="ignore", invalid="ignore"):
        scores = np.where(norms > 0, dots / norms, 0.0)
    return scores


class ChunkIndex:
    """Chunks of a report with their embedding matrix."""

    def __init__(self, chunks: list[Chunk], vectors: np.ndarray, embedder: EmbeddingProvider):
        self.chunks = chunks
        self.vectors = vectors
        self.embedder = embedder

    @classmethod
    def build(cls, chunks: list[Chunk], embedder: EmbeddingProvider) -> "ChunkIndex":
        """Embed every chunk once."""
        if chunks:
            vectors = np.asarray(embedder.embed([c.content for c in chunks]), dtype=np.float32)
        else:
            vectors = np.zeros((0, 0), dtype=np.float32)
        logger.info(f"Indexed {len(chunks)} chunks with {embedder.model_name}")
        return cls(chunks, vectors, embedder)

    def search(
        self, query: str, limit: int = 5, section: Optional[str] = None
    ) -> list[Citation]:
        """Rank chunks against a natural-language query.

        Args:
            query: What to look for
            limit: Maximum number of citations
            section: Only consider chunks whose label starts with this

        Returns:
            Citations ordered by descending relevance
        """
        if not self.chunks or limit < 1 or not query.strip():
            return []

        query_vector = np.asarray(self.embedder.embed([query])[0], dtype=np.float32)
        scores = cosine_similarity(self.vectors, query_vector)

        candidates = range(len(self.chunks))
        if section:
            prefix = section.lower()
            candidates = [i for i in candidates if self.chunks[i].section.lower().startswith(prefix)]

        # Stable sort keeps document order among equal scores
        ranked = sorted(candidates, key=lambda i: -float(scores[i]))[:limit]
        return [
            Citation(
                chunk_id=self.chunks[i].id,
                section=self.chunks[i].section,
                excerpt=excerpt(self.chunks[i].content),
                relevance_score=float(scores[i]),
            )
            for i in ranked
        ]

    def __len__(self) -> int:
        return len(self.chunks)
