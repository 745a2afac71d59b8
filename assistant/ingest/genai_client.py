"""Gemini generateContent REST client."""

import logging

import httpx

from assistant.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

GENAI_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-2.5-flash"


class GenAIClient:
    """Thin wrapper around the generative language REST API.

    Only text parts are sent and read back; safety ratings and usage
    metadata in the response are ignored.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = GENAI_BASE_URL,
        timeout: float = 60.0,
    ):
        if not api_key:
            raise ConfigurationError("GEMINI_API_KEY not set")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def generate(self, contents: list[dict]) -> str:
        """Run one completion over `contents` and return the reply text.

        Args:
            contents: generateContent turns, e.g.
                [{"role": "user", "parts": [{"text": "..."}]}].

        Returns:
            Concatenated text of the first candidate, or "" if it has none.
        """
        url = f"{self.base_url}/v1beta/models/{self.model}:generateContent"
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}
        try:
            resp = httpx.post(
                url, headers=headers, json={"contents": contents}, timeout=self.timeout
            )
        except httpx.RequestError as e:
            logger.error("GenAI request failed for model=%s: %s", self.model, e)
            raise UpstreamError(f"GenAI request failed: {e}") from e

        if resp.status_code >= 400:
            try:
                message = resp.json().get("error", {}).get("message")
            except (ValueError, AttributeError):
                message = None
            logger.error("GenAI API %d for model=%s: %s", resp.status_code, self.model, message)
            raise UpstreamError(message or f"HTTP {resp.status_code}", resp.status_code)

        return _candidate_text(resp.json())


def _candidate_text(data: dict) -> str:
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts)
