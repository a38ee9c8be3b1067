"""Paste a generated result into the focused window: clipboard + Ctrl+V simulation."""

from __future__ import annotations

import logging
import subprocess
import time
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from prompt_actions.output.clipboard import Clipboard
    from prompt_actions.platform.detect import PlatformInfo

logger = logging.getLogger(__name__)

_PASTE_COMMANDS: dict[str, list[str]] = {
    "xdotool": ["xdotool", "key", "--clearmodifiers", "ctrl+v"],
    "wtype": ["wtype", "-M", "ctrl", "-k", "v", "-m", "ctrl"],
    "ydotool": ["ydotool", "key", "29:1", "47:1", "47:0", "29:0"],  # Ctrl+V keycodes
}


class TextInjector:
    """Puts text on the clipboard and simulates a paste with the best available tool."""

    def __init__(self, platform: PlatformInfo, clipboard: Clipboard) -> None:
        self._clipboard = clipboard
        self._method = platform.best_paste_tool

        if self._method is None:
            logger.warning("No paste tool detected. Results will be copied to the clipboard only.")

    def paste(self, text: str) -> bool:
        """Paste ``text`` at the cursor. Returns True if the keystroke was sent.

        The text stays on the clipboard either way, so a failed keystroke
        still leaves it available for a manual paste.
        """
        if not text:
            logger.warning("Empty text, nothing to paste")
            return False

        if not self._clipboard.write(text):
            return False

        if self._method is None:
            return False

        # Give the clipboard owner a moment to start serving the new content
        time.sleep(0.15 if self._method == "xdotool" else 0.05)
        try:
            result = subprocess.run(
                _PASTE_COMMANDS[self._method],
                capture_output=True,
                text=True,
                timeout=5,
            )
        except (OSError, subprocess.TimeoutExpired):
            logger.exception("Paste simulation failed with method '%s'", self._method)
            return False

        if result.returncode != 0:
            logger.error("%s paste failed: %s", self._method, result.stderr)
            return False
        return True
