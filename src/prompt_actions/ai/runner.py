"""Prompt runner: captured text → template substitution → provider → generated text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable

from prompt_actions.ai.factory import create_provider
from prompt_actions.ai.template import substitute
from prompt_actions.events import RUN_COMPLETE, RUN_FAILED, RUN_STATE

if TYPE_CHECKING:
    from prompt_actions.ai.base import ProviderAdapter
    from prompt_actions.config import ProviderConfig
    from prompt_actions.events import EventBus
    from prompt_actions.features.prompts import PromptTemplate
    from prompt_actions.input.selection import InputSource

logger = logging.getLogger(__name__)


class RunState(Enum):
    """Stages of a single run. DONE and FAILED are terminal."""

    IDLE = auto()
    ACQUIRING_INPUT = auto()
    SUBSTITUTING = auto()
    DISPATCHING = auto()
    EXTRACTING = auto()
    DONE = auto()
    FAILED = auto()


@dataclass
class RunResult:
    """Outcome of a successful run."""

    title: str
    text: str
    original_text: str
    prompt: str


class PromptRunner:
    """Runs one template against the captured input text.

    Pipeline: credential check → input → substitution → one HTTP round trip → extraction

    There are no retries: the first failure ends the run and propagates to
    the caller unchanged.
    """

    def __init__(
        self,
        provider_config: ProviderConfig,
        input_source: InputSource,
        event_bus: EventBus | None = None,
        provider_factory: Callable[[ProviderConfig], ProviderAdapter] = create_provider,
    ) -> None:
        self._provider_config = provider_config
        self._input_source = input_source
        self._event_bus = event_bus
        self._provider_factory = provider_factory
        self._state = RunState.IDLE

    @property
    def state(self) -> RunState:
        return self._state

    def _set_state(self, state: RunState, template: PromptTemplate) -> None:
        self._state = state
        logger.debug("Run of '%s': %s", template.title, state.name)
        if self._event_bus is not None:
            self._event_bus.emit(RUN_STATE, state=state, prompt_id=template.id)

    def run(self, template: PromptTemplate, text: str | None = None) -> RunResult:
        """Run ``template`` against ``text``, or against the captured selection/clipboard.

        Raises:
            MissingCredentialError: no API key configured.
            InputUnavailableError: nothing selected and nothing on the clipboard.
            ApiError: the provider returned a non-success status.
        """
        try:
            provider = self._provider_factory(self._provider_config)

            self._set_state(RunState.ACQUIRING_INPUT, template)
            original_text = text if text else self._input_source.acquire()

            self._set_state(RunState.SUBSTITUTING, template)
            prompt = substitute(template.body, original_text)

            self._set_state(RunState.DISPATCHING, template)
            data = provider.send(provider.build_request(prompt))

            self._set_state(RunState.EXTRACTING, template)
            generated = provider.extract_text(data)
        except Exception as e:
            self._set_state(RunState.FAILED, template)
            logger.error("Run of '%s' failed: %s", template.title, e)
            if self._event_bus is not None:
                self._event_bus.emit(RUN_FAILED, error=e, prompt_id=template.id)
            raise

        result = RunResult(
            title=template.title,
            text=generated,
            original_text=original_text,
            prompt=prompt,
        )
        self._set_state(RunState.DONE, template)
        logger.info(
            "Run of '%s' complete: %d → %d chars (model=%s)",
            template.title,
            len(original_text),
            len(generated),
            provider.model,
        )
        if self._event_bus is not None:
            self._event_bus.emit(RUN_COMPLETE, result=result)
        return result
