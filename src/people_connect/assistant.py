"""Text generation helpers backed by the Gemini REST API.

Both helpers are best-effort: when no API key is configured or the call fails
for any reason, they hand back the input unchanged (or no suggestions).
"""

import json
from typing import Any

import requests
import structlog

from people_connect.config import DEFAULT_GEMINI_MODEL, DEFAULT_GEMINI_TIMEOUT, Config

logger = structlog.get_logger()

MAX_SUGGESTIONS = 3
CONTEXT_NOTES = 5

POLISH_PROMPT = """You are a helpful assistant for a personal relationship manager app.
Rewrite the following rough note to be more concise, professional, and grammatically correct.
Keep the tone neutral but warm. Do not add any introductory text, just return the polished note.

Rough note: "{content}\""""

SUGGEST_PROMPT = """Based on the following notes about {name}, suggest 3 brief, friendly conversation starters for the next time we meet.
Return the result as a simple JSON array of strings.

Notes history:
{context}"""


class AssistantError(Exception):
    """Raised when the text generation service cannot produce a reply."""


class Assistant:
    """Client for the Gemini generateContent endpoint."""

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_GEMINI_MODEL,
        timeout_seconds: float = DEFAULT_GEMINI_TIMEOUT,
        base_url: str = "https://generativelanguage.googleapis.com",
    ) -> None:
        """Initialize the assistant.

        Args:
            api_key: Gemini API key; without one every helper passes its input through
            model: Gemini model name
            timeout_seconds: HTTP timeout per request
            base_url: API root
        """
        self.api_key = (api_key or "").strip()
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.base_url = base_url.rstrip("/")

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    def generate(self, prompt: str) -> str:
        """Send a single-turn prompt and return the reply text.

        Raises:
            AssistantError: If the key is missing or the service returns no usable reply
            requests.RequestException: On transport failures
        """
        if not self.api_key:
            raise AssistantError("Gemini API key missing")

        url = f"{self.base_url}/v1beta/models/{self.model}:generateContent"
        payload: dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

        logger.debug("Calling Gemini", model=self.model)
        response = requests.post(
            url,
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            data=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
            timeout=self.timeout_seconds,
        )
        if response.status_code >= 400:
            raise AssistantError(f"Gemini request failed with status {response.status_code}")

        data = response.json() or {}
        candidates = data.get("candidates") or []
        if not candidates:
            raise AssistantError("Gemini returned no candidates")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(str(part.get("text") or "") for part in parts)
        logger.debug("Gemini replied", model=self.model, length=len(text))
        return text.strip()

    def polish_note(self, content: str) -> str:
        """Rewrite a rough note, or return it unchanged if that is not possible."""
        if not self.available:
            logger.warning("Gemini API key is missing, AI features are disabled")
            return content

        try:
            polished = self.generate(POLISH_PROMPT.format(content=content))
        except Exception as e:
            logger.error("Failed to polish note", error=str(e))
            return content
        return polished or content

    def suggest_conversation_starters(self, name: str, notes: list[str]) -> list[str]:
        """Suggest up to three conversation starters from recent notes."""
        if not self.available:
            logger.warning("Gemini API key is missing, AI features are disabled")
            return []

        context = "\n".join(notes[:CONTEXT_NOTES])
        try:
            text = self.generate(SUGGEST_PROMPT.format(name=name, context=context))
            suggestions = _parse_json_array(text)
        except Exception as e:
            logger.error("Failed to suggest conversation starters", error=str(e))
            return []
        return suggestions[:MAX_SUGGESTIONS]


def _parse_json_array(text: str) -> list[str]:
    """Extract the outermost JSON array of strings from a model reply."""
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end == -1 or end < start:
        return []
    parsed = json.loads(text[start : end + 1])
    if not isinstance(parsed, list):
        return []
    return [item.strip() for item in parsed if isinstance(item, str) and item.strip()]


def get_assistant(config: Config) -> Assistant:
    """Build an assistant from configuration."""
    return Assistant(
        api_key=config.gemini_api_key,
        model=config.gemini_model,
        timeout_seconds=config.gemini_timeout,
    )
