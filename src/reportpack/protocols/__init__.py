"""Protocol definitions for extensible components."""

from reportpack.protocols.chunker import ChunkingStrategy
from reportpack.protocols.embedder import EmbeddingProvider
from reportpack.protocols.ingester import Ingester
from reportpack.protocols.llm import GenerationResult, TextGenerator, VisionGenerator

__all__ = [
    "Ingester",
    "EmbeddingProvider",
    "ChunkingStrategy",
    "GenerationResult",
    "TextGenerator",
    "VisionGenerator",
]
