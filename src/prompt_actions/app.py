"""Application wiring: config, storage, prompt store, runner and clipboard actions."""

from __future__ import annotations

import logging
from pathlib import Path

from prompt_actions.ai.runner import PromptRunner, RunResult
from prompt_actions.config import AppConfig
from prompt_actions.events import RUN_COMPLETE, RUN_FAILED, EventBus
from prompt_actions.features.prompts import PromptStore, PromptTemplate
from prompt_actions.input.selection import InputSource
from prompt_actions.output.clipboard import Clipboard
from prompt_actions.output.injector import TextInjector
from prompt_actions.platform.detect import PlatformInfo, detect_platform
from prompt_actions.platform.notifications import FAILURE, SUCCESS, notify
from prompt_actions.storage import LocalStorage

logger = logging.getLogger(__name__)


class PromptActions:
    """Owns the components behind the CLI and the web dashboard.

    Platform tools (clipboard, paste) are detected lazily so listing or
    editing prompts works without a display.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        config_path: Path | None = None,
        storage_path: Path | None = None,
        bus: EventBus | None = None,
        platform: PlatformInfo | None = None,
    ) -> None:
        self._config_path = config_path
        self._config = config or AppConfig.load(config_path)
        self._event_bus = bus or EventBus()
        self._storage = LocalStorage(storage_path)
        self._store = PromptStore(self._storage, self._event_bus)
        self._platform = platform
        self._clipboard: Clipboard | None = None
        self._runner: PromptRunner | None = None

        if self._config.ui.notifications:
            self._event_bus.on(RUN_COMPLETE, self._on_run_complete)
            self._event_bus.on(RUN_FAILED, self._on_run_failed)

    @property
    def config(self) -> AppConfig:
        return self._config

    def save_config(self) -> None:
        self._config.save(self._config_path)
        # Provider settings changed; rebuild the runner on next use
        self._runner = None

    @property
    def store(self) -> PromptStore:
        return self._store

    @property
    def platform(self) -> PlatformInfo:
        if self._platform is None:
            self._platform = detect_platform()
        return self._platform

    @property
    def clipboard(self) -> Clipboard:
        if self._clipboard is None:
            self._clipboard = Clipboard(self.platform)
        return self._clipboard

    @property
    def runner(self) -> PromptRunner:
        if self._runner is None:
            self._runner = PromptRunner(
                provider_config=self._config.provider,
                input_source=InputSource(self.clipboard),
                event_bus=self._event_bus,
            )
        return self._runner

    def run(self, id_or_title: str, text: str | None = None) -> RunResult:
        """Run a stored prompt, looked up by id or title."""
        template: PromptTemplate = self._store.find(id_or_title)
        return self.runner.run(template, text=text)

    def copy(self, text: str) -> bool:
        return self.clipboard.write(text)

    def paste(self, text: str) -> bool:
        return TextInjector(self.platform, self.clipboard).paste(text)

    def _on_run_complete(self, result: RunResult) -> None:
        notify("✅ Complete", result.title, kind=SUCCESS)

    def _on_run_failed(self, error: Exception, prompt_id: str) -> None:
        notify("❌ Error", str(error), kind=FAILURE)
