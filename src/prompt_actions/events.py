"""Internal event bus for inter-component communication."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

logger = logging.getLogger(__name__)

Handler = Callable[..., None]

# Event names and the keyword arguments their handlers receive
PROMPTS_CHANGED = "prompts.changed"  # prompts: list[PromptTemplate]
RUN_STATE = "run.state"  # state: RunState, prompt_id: str
RUN_COMPLETE = "run.complete"  # result: RunResult
RUN_FAILED = "run.failed"  # error: Exception, prompt_id: str


class EventBus:
    """Synchronous publish/subscribe bus.

    A failing handler is logged and skipped; it never aborts the emitter or
    the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> None:
        """Subscribe a handler to an event."""
        self._handlers[event].append(handler)
        logger.debug("Registered handler %s for event '%s'", getattr(handler, "__name__", handler), event)

    def off(self, event: str, handler: Handler) -> None:
        """Unsubscribe a handler from an event."""
        try:
            self._handlers[event].remove(handler)
        except ValueError:
            pass

    def emit(self, event: str, **kwargs: Any) -> None:
        """Call every handler registered for ``event`` with ``kwargs``."""
        handlers = list(self._handlers.get(event, []))
        if not handlers:
            return

        logger.debug("Emitting event '%s' to %d handler(s)", event, len(handlers))
        for handler in handlers:
            try:
                handler(**kwargs)
            except Exception:
                logger.exception(
                    "Error in handler %s for event '%s'", getattr(handler, "__name__", handler), event
                )

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
