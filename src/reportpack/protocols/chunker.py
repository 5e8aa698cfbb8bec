"""Protocol for text chunking strategies."""

from typing import Protocol, runtime_checkable

from reportpack.models import Chunk


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Protocol for text chunking strategies.

    Implementations receive normalized text and must never raise on it.
    """

    def chunk(self, text: str) -> list[Chunk]:
        """Split text into ordered, labeled chunks."""
        ...
