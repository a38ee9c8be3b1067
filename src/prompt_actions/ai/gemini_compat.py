"""Gemini-compatible ``generateContent`` adapter (Google AI Studio, gemini-balance)."""

from __future__ import annotations

from typing import Any

from prompt_actions.ai.base import ProviderAdapter, ProviderRequest
from prompt_actions.constants import (
    GENERATION_MAX_TOKENS,
    GENERATION_TEMPERATURE,
    GENERATION_TOP_K,
    GENERATION_TOP_P,
)


def select_part_text(parts: list[Any]) -> str:
    """Text of the answer part.

    Thinking models return their reasoning as leading "thought" parts, so with
    several parts the last one holds the answer.
    """
    if not parts:
        return ""

    last = _part_text(parts[-1]) if len(parts) > 1 else ""
    return last or _part_text(parts[0])


def _part_text(part: Any) -> str:
    if isinstance(part, dict):
        return part.get("text") or ""
    return ""


class GeminiCompatibleProvider(ProviderAdapter):
    """Provider speaking the ``/v1beta/models/{model}:generateContent`` wire format."""

    name = "gemini-compatible"

    @property
    def url(self) -> str:
        return f"{self._endpoint}/v1beta/models/{self._model}:generateContent"

    def build_request(self, prompt: str) -> ProviderRequest:
        return ProviderRequest(
            url=self.url,
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self._api_key,
            },
            body={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "temperature": GENERATION_TEMPERATURE,
                    "topK": GENERATION_TOP_K,
                    "topP": GENERATION_TOP_P,
                    "maxOutputTokens": GENERATION_MAX_TOKENS,
                },
            },
        )

    def extract_text(self, data: Any) -> str:
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            return ""
        if not isinstance(parts, list):
            return ""
        return select_part_text(parts)
