"""Protocols for the LLM text-generation service."""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class GenerationResult:
    """Generated text, or a typed failure with an error message."""

    text: str
    success: bool
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "GenerationResult":
        return cls(text="", success=False, error=error)


@runtime_checkable
class TextGenerator(Protocol):
    """Anything that turns a prompt and a token budget into text."""

    def generate(self, prompt: str, max_tokens: int = 4000) -> GenerationResult:
        ...


@runtime_checkable
class VisionGenerator(Protocol):
    """A generator that also accepts an inline image."""

    def analyze_image(
        self,
        prompt: str,
        image_base64: str,
        mime_type: str,
        max_tokens: int = 2000,
    ) -> GenerationResult:
        ...
