# src/chat/llm.py
import logging
import requests
from typing import Dict, List, Optional

from config import settings
from errors import UpstreamError

logger = logging.getLogger(__name__)


class LLMClient:
    """Thin client for an OpenAI-compatible chat completions endpoint."""

    def __init__(self, api_url: str, api_key: str, model: str, timeout: float):
        self.api_url = api_url
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def complete(self, messages: List[Dict[str, str]]) -> Optional[str]:
        """Return the first choice's content, or None if it is not a string.

        Transport errors and non-200 responses raise UpstreamError.
        """
        payload = {"model": self.model, "messages": messages}
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        try:
            response = requests.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"Completion request failed: {e}") from e

        if response.status_code != 200:
            raise UpstreamError(f"Completion service returned {response.status_code}: {response.text[:200]}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("Completion service returned invalid JSON") from e

        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return None
        message = choices[0].get("message")
        content = message.get("content") if isinstance(message, dict) else None
        return content if isinstance(content, str) else None


def get_llm_client() -> LLMClient:
    """FastAPI dependency; tests override it with a stub."""
    return LLMClient(
        api_url=settings.LLM_API_URL,
        api_key=settings.LLM_API_KEY,
        model=settings.LLM_MODEL,
        timeout=settings.LLM_TIMEOUT_SECONDS,
    )
