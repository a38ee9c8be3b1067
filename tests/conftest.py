"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from prompt_actions.config import AppConfig
from prompt_actions.events import EventBus
from prompt_actions.features.prompts import PromptStore
from prompt_actions.storage import LocalStorage


@pytest.fixture
def event_bus() -> EventBus:
    """Fresh event bus for each test."""
    bus = EventBus()
    yield bus
    bus.clear()


@pytest.fixture
def config() -> AppConfig:
    """Config with an openai-compatible provider and notifications off."""
    cfg = AppConfig()
    cfg.provider.api_format = "openai"
    cfg.provider.api_key = "sk-test"
    cfg.provider.model = "gpt-4o-mini"
    cfg.provider.custom_endpoint = "https://llm.example.com"
    cfg.ui.notifications = False
    return cfg


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def store(storage: LocalStorage, event_bus: EventBus) -> PromptStore:
    return PromptStore(storage, event_bus)


def make_clipboard(selection: str | None = None, clipboard: str | None = None) -> MagicMock:
    """Mock Clipboard returning fixed selection/clipboard text."""
    mock = MagicMock()
    mock.read_selection.return_value = selection
    mock.read.return_value = clipboard
    mock.write.return_value = True
    return mock
