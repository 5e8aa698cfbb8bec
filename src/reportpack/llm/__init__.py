"""LLM clients."""

from reportpack.llm.gemini import GeminiClient, get_gemini_client, read_candidate, retry_delay

__all__ = ["GeminiClient", "get_gemini_client", "read_candidate", "retry_delay"]
