"""Clipboard and PRIMARY selection access for X11 (xclip/xsel) and Wayland (wl-clipboard)."""

from __future__ import annotations

import logging
import subprocess
import time
from typing import TYPE_CHECKING

from prompt_actions.constants import CLIPBOARD_TIMEOUT

if TYPE_CHECKING:
    from prompt_actions.platform.detect import PlatformInfo

logger = logging.getLogger(__name__)

CLIPBOARD = "clipboard"
PRIMARY = "primary"

_READ_COMMANDS: dict[str, dict[str, list[str]]] = {
    "wl-clipboard": {
        CLIPBOARD: ["wl-paste", "--no-newline"],
        PRIMARY: ["wl-paste", "--primary", "--no-newline"],
    },
    "xclip": {
        CLIPBOARD: ["xclip", "-selection", "clipboard", "-o"],
        PRIMARY: ["xclip", "-selection", "primary", "-o"],
    },
    "xsel": {
        CLIPBOARD: ["xsel", "--clipboard", "--output"],
        PRIMARY: ["xsel", "--primary", "--output"],
    },
}


class Clipboard:
    """Cross-platform clipboard read/write using system tools."""

    def __init__(self, platform: PlatformInfo) -> None:
        self._platform = platform
        self._tool = platform.best_clipboard_tool

        if self._tool is None:
            logger.warning("No clipboard tool detected! Clipboard operations will fail.")

    def read(self, selection: str = CLIPBOARD) -> str | None:
        """Read the clipboard (or the PRIMARY selection). Returns None on failure."""
        if self._tool is None:
            logger.error("No clipboard tool available")
            return None

        cmd = _READ_COMMANDS[self._tool][selection]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=CLIPBOARD_TIMEOUT,
            )
        except subprocess.TimeoutExpired:
            logger.error("Reading %s timed out", selection)
            return None
        except OSError:
            logger.exception("Reading %s failed", selection)
            return None

        if result.returncode != 0:
            # Empty selection is not an error
            if "nothing is copied" in result.stderr.lower() or result.returncode == 1:
                return ""
            logger.error("Reading %s failed: %s", selection, result.stderr)
            return None

        return result.stdout

    def read_selection(self) -> str | None:
        """Read the currently highlighted text (PRIMARY selection)."""
        return self.read(PRIMARY)

    def write(self, text: str) -> bool:
        """Write text to the clipboard. Returns True on success."""
        try:
            if self._tool == "wl-clipboard":
                result = subprocess.run(
                    ["wl-copy"],
                    input=text,
                    text=True,
                    capture_output=True,
                    timeout=CLIPBOARD_TIMEOUT,
                )
                if result.returncode != 0:
                    logger.error("Clipboard write failed: %s", result.stderr)
                    return False
            elif self._tool == "xclip":
                # xclip stays alive to serve clipboard requests, so
                # communicate()/wait() would block until another app
                # reads the clipboard. Write to stdin and let it run.
                proc = subprocess.Popen(
                    ["xclip", "-selection", "clipboard"],
                    stdin=subprocess.PIPE,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                )
                if proc.stdin:
                    proc.stdin.write(text.encode())
                    proc.stdin.close()
                # Brief pause to let xclip read the input
                time.sleep(0.05)
            elif self._tool == "xsel":
                result = subprocess.run(
                    ["xsel", "--clipboard", "--input"],
                    input=text,
                    text=True,
                    capture_output=True,
                    timeout=CLIPBOARD_TIMEOUT,
                )
                if result.returncode != 0:
                    logger.error("Clipboard write failed: %s", result.stderr)
                    return False
            else:
                logger.error("No clipboard tool available")
                return False

            return True
        except subprocess.TimeoutExpired:
            logger.error("Clipboard write timed out")
            return False
        except OSError:
            logger.exception("Clipboard write failed")
            return False
