"""OpenAI-compatible chat completions adapter (OpenAI, OpenRouter, local gateways)."""

from __future__ import annotations

from typing import Any

from prompt_actions.ai.base import ProviderAdapter, ProviderRequest
from prompt_actions.constants import (
    CLIENT_REFERER,
    CLIENT_TITLE,
    GENERATION_MAX_TOKENS,
    GENERATION_TEMPERATURE,
)


class OpenAICompatibleProvider(ProviderAdapter):
    """Provider speaking the ``/v1/chat/completions`` wire format."""

    name = "openai-compatible"

    @property
    def url(self) -> str:
        # Endpoints configured as ".../v1" must not end up with "/v1/v1/"
        if self._endpoint.endswith("/v1"):
            return f"{self._endpoint}/chat/completions"
        return f"{self._endpoint}/v1/chat/completions"

    def build_request(self, prompt: str) -> ProviderRequest:
        return ProviderRequest(
            url=self.url,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
                "HTTP-Referer": CLIENT_REFERER,
                "X-Title": CLIENT_TITLE,
            },
            body={
                "model": self._model,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": GENERATION_TEMPERATURE,
                "max_tokens": GENERATION_MAX_TOKENS,
            },
        )

    def extract_text(self, data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return ""
        return content or ""
