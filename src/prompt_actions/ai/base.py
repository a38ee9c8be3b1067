"""Abstract provider interface: one request shape and one response shape per wire format."""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from prompt_actions.constants import DEFAULT_GEMINI_ENDPOINT
from prompt_actions.errors import ApiError

logger = logging.getLogger(__name__)


@dataclass
class ProviderRequest:
    """A fully rendered outbound request."""

    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] = field(default_factory=dict)


def resolve_endpoint(custom_endpoint: str | None) -> str:
    """Custom endpoint (trailing slash stripped) or the default Gemini host."""
    endpoint = custom_endpoint or DEFAULT_GEMINI_ENDPOINT
    return endpoint.removesuffix("/")


class ProviderAdapter(abc.ABC):
    """Base class for the LLM wire-format adapters."""

    name: str = ""

    def __init__(
        self,
        api_key: str,
        model: str,
        endpoint: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._endpoint = resolve_endpoint(endpoint)
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def model(self) -> str:
        return self._model

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @abc.abstractmethod
    def build_request(self, prompt: str) -> ProviderRequest:
        """Render the URL, headers and JSON body for a single-prompt generation."""
        ...

    @abc.abstractmethod
    def extract_text(self, data: Any) -> str:
        """Pull the generated text out of a decoded response. Missing paths yield ""."""
        ...

    def send(self, request: ProviderRequest) -> Any:
        """POST a rendered request and return the decoded JSON response.

        Raises:
            ApiError: the provider answered with a non-success status.
        """
        logger.info("POST %s (model=%s)", request.url, self._model)
        response = self._session.post(
            request.url,
            headers=request.headers,
            json=request.body,
            timeout=self._timeout,
        )
        if not response.ok:
            logger.error("%s request failed with status %d", self.name, response.status_code)
            raise ApiError(response.status_code, response.text)
        return response.json()
