"""Client for the Gemini generateContent REST endpoint."""

import logging
import time
from typing import Any, Callable, Optional

import httpx

from reportpack.config import Settings, get_settings
from reportpack.errors import ConfigurationError
from reportpack.protocols import GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 10.0
MAX_RETRY_AFTER = 30.0
TRANSPORT_RETRY_DELAY = 2.0
TRUNCATION_NOTE = "\n\n[Response truncated due to length]"


def retry_delay(response: httpx.Response) -> float:
    """Seconds to wait after a 429, from Retry-After when it is numeric."""
    header = response.headers.get("retry-after")
    try:
        delay = float(header) if header is not None else DEFAULT_RETRY_AFTER
    except ValueError:
        delay = DEFAULT_RETRY_AFTER
    return min(max(delay, 0.0), MAX_RETRY_AFTER)


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return data["error"].get("message") or "Unknown error"
    return "Unknown error"


def read_candidate(data: dict[str, Any]) -> GenerationResult:
    """Turn a generateContent response body into a result.

    Partial text cut off by MAX_TOKENS is still a success, with a note
    appended. Empty output becomes a failure naming the block or finish
    reason.
    """
    candidates = data.get("candidates") or [{}]
    candidate = candidates[0] or {}
    parts = (candidate.get("content") or {}).get("parts") or [{}]
    text = parts[0].get("text") or ""
    finish_reason = candidate.get("finishReason")
    block_reason = (data.get("promptFeedback") or {}).get("blockReason")

    if text and finish_reason == "MAX_TOKENS":
        logger.info(f"Response truncated (MAX_TOKENS), returning {len(text)} chars")
        return GenerationResult(text=text + TRUNCATION_NOTE, success=True)

    if not text:
        logger.info(f"Empty response. finishReason: {finish_reason}, blockReason: {block_reason}")
        if finish_reason == "SAFETY":
            return GenerationResult.failure("Response blocked due to safety settings")
        if block_reason:
            return GenerationResult.failure(f"Prompt blocked: {block_reason}")
        if finish_reason == "MAX_TOKENS":
            return GenerationResult.failure("Response too long - try asking a more specific question")
        return GenerationResult.failure("Empty response from Gemini")

    return GenerationResult(text=text, success=True)


class GeminiClient:
    """Synchronous Gemini client implementing TextGenerator and VisionGenerator.

    Only rate limiting (HTTP 429) and transport errors are retried; other
    API errors are returned as failed results straight away.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        vision_model: str = "gemini-2.0-flash",
        api_url: str = "https://generativelanguage.googleapis.com/v1beta/models",
        max_retries: int = 2,
        timeout: float = 60.0,
        client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if not api_key:
            raise ConfigurationError("A Gemini API key is required")
        self.api_key = api_key
        self.model = model
        self.vision_model = vision_model
        self.api_url = api_url.rstrip("/")
        self.max_retries = max(1, max_retries)
        self._client = client or httpx.Client(timeout=timeout)
        self._sleep = sleep

    def generate(self, prompt: str, max_tokens: int = 4000) -> GenerationResult:
        """Generate text for a prompt.

        Args:
            prompt: Full prompt text
            max_tokens: Output token budget

        Returns:
            GenerationResult with text on success, or an error message
        """
        logger.info(f"Using model {self.model}, prompt length {len(prompt)} characters")
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"maxOutputTokens": max_tokens, "temperature": 0.2},
        }
        return self._request(self.model, body, label="Gemini")

    def analyze_image(
        self,
        prompt: str,
        image_base64: str,
        mime_type: str,
        max_tokens: int = 2000,
    ) -> GenerationResult:
        """Ask the vision model about one inline base64 image."""
        logger.info(f"Using vision model {self.vision_model}, image size {len(image_base64) // 1024}KB")
        body = {
            "contents": [
                {
                    "parts": [
                        {"text": prompt},
                        {"inline_data": {"mime_type": mime_type, "data": image_base64}},
                    ]
                }
            ],
            "generationConfig": {"maxOutputTokens": max_tokens, "temperature": 0.1},
        }
        return self._request(self.vision_model, body, label="Gemini Vision")

    def close(self) -> None:
        self._client.close()

    def _request(self, model: str, body: dict[str, Any], label: str) -> GenerationResult:
        url = f"{self.api_url}/{model}:generateContent"
        headers = {"x-goog-api-key": self.api_key}
        last_error = "Failed after retries"

        for attempt in range(1, self.max_retries + 1):
            final = attempt == self.max_retries
            try:
                response = self._client.post(url, json=body, headers=headers)
            except httpx.TransportError as e:
                logger.warning(f"{label} attempt {attempt}/{self.max_retries} failed: {e}")
                last_error = str(e) or type(e).__name__
                if not final:
                    self._sleep(TRANSPORT_RETRY_DELAY)
                continue

            if response.status_code == 429:
                delay = retry_delay(response)
                last_error = f"Rate limited. Please wait and try again. {_error_message(response)}".strip()
                logger.warning(
                    f"{label} rate limited (attempt {attempt}/{self.max_retries}), waiting {delay:.0f}s"
                )
                if not final:
                    self._sleep(delay)
                continue

            if response.is_error:
                logger.error(f"{label} API error: {response.status_code}")
                return GenerationResult.failure(
                    f"{label} API error: {response.status_code} - {_error_message(response)}"
                )

            try:
                data = response.json()
            except ValueError:
                return GenerationResult.failure(f"{label} returned a non-JSON response")

            result = read_candidate(data if isinstance(data, dict) else {})
            if result.success:
                logger.info(f"{label} response received: {len(result.text)} characters")
            return result

        return GenerationResult.failure(last_error)


def get_gemini_client(settings: Optional[Settings] = None) -> GeminiClient:
    """Build a client from settings.

    Raises:
        ConfigurationError: if no API key is configured
    """
    settings = settings or get_settings()
    if settings.GEMINI_API_KEY is None or not settings.GEMINI_API_KEY.get_secret_value():
        raise ConfigurationError("REPORTPACK_GEMINI_API_KEY is not set")
    return GeminiClient(
        api_key=settings.GEMINI_API_KEY.get_secret_value(),
        model=settings.GEMINI_MODEL,
        vision_model=settings.GEMINI_VISION_MODEL,
        api_url=settings.GEMINI_API_URL,
        max_retries=settings.LLM_MAX_RETRIES,
        timeout=settings.LLM_TIMEOUT_SECONDS,
    )
