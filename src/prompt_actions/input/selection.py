"""Capture the text a prompt runs against: the selection, else the clipboard."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from prompt_actions.errors import InputUnavailableError

if TYPE_CHECKING:
    from prompt_actions.output.clipboard import Clipboard

logger = logging.getLogger(__name__)


class InputSource:
    """Reads the highlighted text, falling back to the clipboard contents."""

    def __init__(self, clipboard: Clipboard | None) -> None:
        self._clipboard = clipboard

    def selected_text(self) -> str | None:
        if self._clipboard is None:
            return None
        return self._clipboard.read_selection()

    def clipboard_text(self) -> str | None:
        if self._clipboard is None:
            return None
        return self._clipboard.read()

    def acquire(self) -> str:
        """Return the first non-empty text of selection and clipboard.

        Raises:
            InputUnavailableError: both are empty or unreadable.
        """
        text = self.selected_text()
        if text:
            logger.info("Using selected text (%d chars)", len(text))
            return text

        text = self.clipboard_text()
        if text:
            logger.info("No selection, using clipboard text (%d chars)", len(text))
            return text

        raise InputUnavailableError()
