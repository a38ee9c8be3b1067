"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
import requests_mock

from prompt_actions.__main__ import build_parser, dispatch
from prompt_actions.app import PromptActions
from prompt_actions.config import AppConfig
from prompt_actions.events import EventBus
from prompt_actions.platform.detect import DisplayServer, PlatformInfo


@pytest.fixture
def actions(tmp_path: Path, config: AppConfig, event_bus: EventBus) -> PromptActions:
    platform = PlatformInfo(
        display_server=DisplayServer.UNKNOWN,
        has_xclip=False,
        has_xsel=False,
        has_wl_clipboard=False,
    )
    return PromptActions(
        config=config,
        storage_path=tmp_path / "storage.json",
        bus=event_bus,
        platform=platform,
    )


def _run(actions: PromptActions, *argv: str) -> int:
    return dispatch(actions, build_parser().parse_args(list(argv)))


class TestCli:
    def test_list_empty(self, actions: PromptActions, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(actions, "list") == 0
        assert "No Prompts Found" in capsys.readouterr().out

    def test_create_and_list(self, actions: PromptActions, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(actions, "create", "--title", "Translate", "--body", "Translate: {selection}") == 0
        assert _run(actions, "list") == 0
        assert "Translate" in capsys.readouterr().out

    def test_create_validation_reported(
        self, actions: PromptActions, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(actions, "create", "--title", "", "--body", "x") == 1
        assert "Please fill all fields" in capsys.readouterr().out
        assert actions.store.load_all() == []

    def test_edit_keeps_unspecified_fields(self, actions: PromptActions) -> None:
        prompt = actions.store.create("a", "body")
        assert _run(actions, "edit", prompt.id, "--title", "b") == 0

        edited = actions.store.get(prompt.id)
        assert edited.title == "b"
        assert edited.body == "body"

    def test_edit_unknown_reports_error(
        self, actions: PromptActions, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(actions, "edit", "missing", "--title", "x") == 1
        assert "not found" in capsys.readouterr().out

    def test_delete_declined(self, actions: PromptActions) -> None:
        prompt = actions.store.create("a", "body")
        with patch("prompt_actions.__main__.Confirm.ask", return_value=False):
            assert _run(actions, "delete", prompt.id) == 0
        assert len(actions.store.load_all()) == 1

    def test_delete_with_yes(self, actions: PromptActions) -> None:
        prompt = actions.store.create("a", "body")
        with patch("prompt_actions.__main__.Confirm.ask") as mock_ask:
            assert _run(actions, "delete", prompt.id, "--yes") == 0
        mock_ask.assert_not_called()
        assert actions.store.load_all() == []

    def test_run_by_title(self, actions: PromptActions, capsys: pytest.CaptureFixture[str]) -> None:
        actions.store.create("Translate", "Translate: {selection}")
        with requests_mock.Mocker() as m:
            m.post(
                "https://llm.example.com/v1/chat/completions",
                json={"choices": [{"message": {"content": "bonjour"}}]},
            )
            assert _run(actions, "run", "translate", "--text", "hello") == 0

        assert "bonjour" in capsys.readouterr().out

    def test_run_api_error_surfaced(
        self, actions: PromptActions, capsys: pytest.CaptureFixture[str]
    ) -> None:
        actions.store.create("Translate", "Translate: {selection}")
        with requests_mock.Mocker() as m:
            m.post("https://llm.example.com/v1/chat/completions", status_code=403, text="forbidden")
            assert _run(actions, "run", "Translate", "--text", "hello") == 1

        out = capsys.readouterr().out
        assert "403" in out
        assert "forbidden" in out

    def test_run_unexpected_error_caught(
        self, actions: PromptActions, capsys: pytest.CaptureFixture[str]
    ) -> None:
        actions.store.create("Translate", "{selection}")
        with patch.object(PromptActions, "run", side_effect=RuntimeError("kaboom")):
            assert _run(actions, "run", "Translate", "--text", "x") == 1
        assert "kaboom" in capsys.readouterr().out

    def test_run_without_prompts(self, actions: PromptActions, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(actions, "run", "anything") == 1
        assert "No prompts found" in capsys.readouterr().out

    def test_config_masks_key(self, actions: PromptActions, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(actions, "config") == 0
        out = capsys.readouterr().out
        assert "sk-test" not in out
        assert "openai" in out
