"""Local embeddings for report chunk retrieval."""

import logging

import numpy as np
from sentence_transformers import SentenceTransformer

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder:
    """EmbeddingProvider backed by a local sentence-transformers model.

    Weights are loaded on the first ``embed`` call, so an MCP server that
    never receives a recall request never loads them.
    """

    DEFAULT_MODEL = "all-MiniLM-L6-v2"
    BATCH_SIZE = 32

    def __init__(self, model_name: str | None = None, batch_size: int = BATCH_SIZE):
        self._model_name = model_name or self.DEFAULT_MODEL
        self.batch_size = batch_size
        self._model: SentenceTransformer | None = None

    @property
    def model_name(self) -> str:
        return self._model_name

    def _load(self) -> SentenceTransformer:
        if self._model is None:
            logger.info(f"Loading embedding model {self._model_name}")
            self._model = SentenceTransformer(self._model_name)
        return self._model

    def embed(self, texts: list[str]) -> np.ndarray:
        """Embed chunk contents or a search query.

        Args:
            texts: Strings to embed

        Returns:
            float32 array of unit vectors, shape (len(texts), embedding_dim)
        """
        if not texts:
            return np.zeros((0, 0), dtype=np.float32)

        vectors = self._load().encode(
            texts,
            batch_size=self.batch_size,
            show_progress_bar=False,
            convert_to_numpy=True,
            normalize_embeddings=True,
        )
        logger.debug(f"Embedded {len(texts)} texts with {self._model_name}")
        return vectors.astype(np.float32, copy=False)
