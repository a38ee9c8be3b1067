"""Select the provider adapter for the configured wire format."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from prompt_actions.ai.gemini_compat import GeminiCompatibleProvider
from prompt_actions.ai.openai_compat import OpenAICompatibleProvider
from prompt_actions.errors import MissingCredentialError

if TYPE_CHECKING:
    from prompt_actions.ai.base import ProviderAdapter
    from prompt_actions.config import ProviderConfig

logger = logging.getLogger(__name__)


class ApiFormat(Enum):
    """Supported provider wire formats."""

    OPENAI = "openai"
    GEMINI = "gemini"

    @classmethod
    def parse(cls, value: str) -> ApiFormat:
        """Accept "openai"/"gemini" as well as the "-compatible" spellings."""
        if not isinstance(value, str):
            raise ValueError(f"API format must be a string, got {value!r}")
        normalized = value.strip().lower().removesuffix("-compatible")
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(
                f"Unknown API format '{value}' (expected 'openai' or 'gemini')"
            ) from None


_PROVIDERS: dict[ApiFormat, type[ProviderAdapter]] = {
    ApiFormat.OPENAI: OpenAICompatibleProvider,
    ApiFormat.GEMINI: GeminiCompatibleProvider,
}


def create_provider(config: ProviderConfig) -> ProviderAdapter:
    """Build the adapter for ``config``.

    Raises:
        MissingCredentialError: no API key is configured.
    """
    api_key = config.resolved_api_key
    if not api_key:
        raise MissingCredentialError()

    api_format = ApiFormat.parse(config.api_format)
    provider_cls = _PROVIDERS[api_format]
    provider = provider_cls(
        api_key=api_key,
        model=config.model,
        endpoint=config.custom_endpoint or None,
        timeout=config.timeout,
    )
    logger.debug("Using %s provider at %s", provider.name, provider.endpoint)
    return provider
