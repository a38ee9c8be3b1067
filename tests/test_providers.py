"""Tests for template substitution and the provider wire-format adapters."""

from __future__ import annotations

import pytest
import requests_mock

from prompt_actions.ai.factory import ApiFormat, create_provider
from prompt_actions.ai.gemini_compat import GeminiCompatibleProvider, select_part_text
from prompt_actions.ai.openai_compat import OpenAICompatibleProvider
from prompt_actions.ai.template import substitute
from prompt_actions.config import ProviderConfig
from prompt_actions.constants import DEFAULT_GEMINI_ENDPOINT
from prompt_actions.errors import ApiError, MissingCredentialError


def _complete(provider, prompt: str) -> str:
    return provider.extract_text(provider.send(provider.build_request(prompt)))


class TestSubstitute:
    @pytest.mark.parametrize("count", [0, 1, 3])
    def test_replaces_every_occurrence(self, count: int) -> None:
        body = "Q: " + " / ".join(["{selection}"] * count)
        text = "a$1 \\n {x} & <b>"

        result = substitute(body, text)

        assert "{selection}" not in result
        assert result.count(text) == count

    def test_no_recursive_substitution(self) -> None:
        assert substitute("[{selection}]", "{selection}") == "[{selection}]"

    def test_body_without_placeholder_unchanged(self) -> None:
        assert substitute("Say hi", "ignored") == "Say hi"


class TestOpenAICompatibleProvider:
    def test_url_appends_v1(self) -> None:
        provider = OpenAICompatibleProvider("key", "m", endpoint="https://x")
        assert provider.url == "https://x/v1/chat/completions"

    def test_url_does_not_duplicate_v1(self) -> None:
        provider = OpenAICompatibleProvider("key", "m", endpoint="https://x/v1")
        assert provider.url == "https://x/v1/chat/completions"

    def test_trailing_slash_stripped(self) -> None:
        provider = OpenAICompatibleProvider("key", "m", endpoint="https://x/v1/")
        assert provider.url == "https://x/v1/chat/completions"

    def test_request_shape(self) -> None:
        provider = OpenAICompatibleProvider("sk-1", "gpt-4o-mini", endpoint="https://x")
        request = provider.build_request("hello")

        assert request.headers["Authorization"] == "Bearer sk-1"
        assert "HTTP-Referer" in request.headers
        assert "X-Title" in request.headers
        assert request.body == {
            "model": "gpt-4o-mini",
            "messages": [{"role": "user", "content": "hello"}],
            "temperature": 0.3,
            "max_tokens": 8192,
        }

    @pytest.mark.parametrize(
        "data",
        [{}, {"choices": []}, {"choices": [{}]}, {"choices": [{"message": {"content": None}}]}, []],
    )
    def test_missing_content_is_empty(self, data: object) -> None:
        provider = OpenAICompatibleProvider("k", "m")
        assert provider.extract_text(data) == ""

    def test_send_and_extract(self) -> None:
        provider = OpenAICompatibleProvider("sk-1", "m", endpoint="https://x")
        with requests_mock.Mocker() as m:
            m.post(
                "https://x/v1/chat/completions",
                json={"choices": [{"message": {"content": "bonjour"}}]},
            )
            assert _complete(provider, "hello") == "bonjour"
            assert m.last_request.json()["messages"][0]["content"] == "hello"
            assert m.last_request.headers["Authorization"] == "Bearer sk-1"

    def test_error_status_raises_api_error_verbatim(self) -> None:
        provider = OpenAICompatibleProvider("sk-1", "m", endpoint="https://x")
        with requests_mock.Mocker() as m:
            m.post("https://x/v1/chat/completions", status_code=401, text='{"error":"bad key"}')
            with pytest.raises(ApiError) as exc_info:
                _complete(provider, "hello")

        assert exc_info.value.status_code == 401
        assert exc_info.value.body == '{"error":"bad key"}'
        assert str(exc_info.value) == 'API request failed: 401 - {"error":"bad key"}'


class TestGeminiCompatibleProvider:
    def test_default_endpoint(self) -> None:
        provider = GeminiCompatibleProvider("key", "gemini-2.0-flash")
        assert provider.url == (
            f"{DEFAULT_GEMINI_ENDPOINT}/v1beta/models/gemini-2.0-flash:generateContent"
        )

    def test_custom_endpoint_trailing_slash(self) -> None:
        provider = GeminiCompatibleProvider("key", "g", endpoint="https://proxy.local/")
        assert provider.url == "https://proxy.local/v1beta/models/g:generateContent"

    def test_request_shape(self) -> None:
        provider = GeminiCompatibleProvider("g-key", "g")
        request = provider.build_request("hello")

        assert request.headers["x-goog-api-key"] == "g-key"
        assert "Authorization" not in request.headers
        assert request.body == {
            "contents": [{"parts": [{"text": "hello"}]}],
            "generationConfig": {
                "temperature": 0.3,
                "topK": 40,
                "topP": 0.95,
                "maxOutputTokens": 8192,
            },
        }

    def test_part_selection(self) -> None:
        assert select_part_text([{"text": "A"}, {"text": "B"}]) == "B"
        assert select_part_text([{"text": "A"}]) == "A"
        assert select_part_text([]) == ""

    def test_last_part_without_text_falls_back_to_first(self) -> None:
        assert select_part_text([{"text": "A"}, {"functionCall": {}}]) == "A"

    def test_extract_missing_parts(self) -> None:
        provider = GeminiCompatibleProvider("k", "g")
        assert provider.extract_text({}) == ""
        assert provider.extract_text({"candidates": [{"content": {}}]}) == ""

    def test_send_takes_last_part(self) -> None:
        provider = GeminiCompatibleProvider("g-key", "g", endpoint="https://proxy.local")
        with requests_mock.Mocker() as m:
            m.post(
                "https://proxy.local/v1beta/models/g:generateContent",
                json={
                    "candidates": [
                        {"content": {"parts": [{"text": "thinking...", "thought": True}, {"text": "answer"}]}}
                    ]
                },
            )
            assert _complete(provider, "q") == "answer"
            assert m.last_request.headers["x-goog-api-key"] == "g-key"


class TestCreateProvider:
    def test_missing_key_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PROMPT_ACTIONS_API_KEY", raising=False)
        with pytest.raises(MissingCredentialError):
            create_provider(ProviderConfig(api_key=""))

    @pytest.mark.parametrize(
        "api_format,cls",
        [
            ("openai", OpenAICompatibleProvider),
            ("openai-compatible", OpenAICompatibleProvider),
            ("gemini", GeminiCompatibleProvider),
            ("Gemini-Compatible", GeminiCompatibleProvider),
        ],
    )
    def test_dispatch_on_format(self, api_format: str, cls: type) -> None:
        provider = create_provider(ProviderConfig(api_format=api_format, api_key="k"))
        assert isinstance(provider, cls)

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            ApiFormat.parse("anthropic")

    @pytest.mark.parametrize("value", [5, None, ["openai"]])
    def test_non_string_format(self, value: object) -> None:
        with pytest.raises(ValueError):
            ApiFormat.parse(value)

    def test_custom_endpoint_used(self) -> None:
        provider = create_provider(
            ProviderConfig(api_format="openai", api_key="k", custom_endpoint="https://r.ai/api/v1/")
        )
        assert provider.endpoint == "https://r.ai/api/v1"
