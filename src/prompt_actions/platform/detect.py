"""Detect display server and available clipboard/keystroke tools."""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class DisplayServer(Enum):
    """Display server type."""

    X11 = "x11"
    WAYLAND = "wayland"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PlatformInfo:
    """Detected platform capabilities."""

    display_server: DisplayServer

    # Clipboard / selection tools
    has_xclip: bool
    has_xsel: bool
    has_wl_clipboard: bool

    # Keystroke tools used to paste a result
    has_xdotool: bool = False
    has_wtype: bool = False
    has_ydotool: bool = False

    @property
    def best_clipboard_tool(self) -> str | None:
        """Return the best available clipboard tool for this platform."""
        if self.display_server == DisplayServer.WAYLAND:
            if self.has_wl_clipboard:
                return "wl-clipboard"
            # Fallback to xclip under XWayland
            if self.has_xclip:
                return "xclip"
            if self.has_xsel:
                return "xsel"
        else:
            if self.has_xclip:
                return "xclip"
            if self.has_xsel:
                return "xsel"
        return None

    @property
    def best_paste_tool(self) -> str | None:
        """Return the best available tool for simulating Ctrl+V."""
        if self.display_server == DisplayServer.WAYLAND:
            if self.has_wtype:
                return "wtype"
            if self.has_ydotool:
                return "ydotool"
            if self.has_xdotool:
                return "xdotool"
        elif self.has_xdotool:
            return "xdotool"
        return None


def _detect_display_server() -> DisplayServer:
    """Detect the display server from environment variables."""
    session_type = os.environ.get("XDG_SESSION_TYPE", "").lower()
    if session_type == "wayland":
        return DisplayServer.WAYLAND
    if session_type == "x11":
        return DisplayServer.X11

    # Fallback: check for WAYLAND_DISPLAY
    if os.environ.get("WAYLAND_DISPLAY"):
        return DisplayServer.WAYLAND
    if os.environ.get("DISPLAY"):
        return DisplayServer.X11

    return DisplayServer.UNKNOWN


def _has_tool(name: str) -> bool:
    """Check if a command-line tool is available on PATH."""
    return shutil.which(name) is not None


def detect_platform() -> PlatformInfo:
    """Detect the display server and the tools on PATH."""
    info = PlatformInfo(
        display_server=_detect_display_server(),
        has_xclip=_has_tool("xclip"),
        has_xsel=_has_tool("xsel"),
        has_wl_clipboard=_has_tool("wl-paste"),
        has_xdotool=_has_tool("xdotool"),
        has_wtype=_has_tool("wtype"),
        has_ydotool=_has_tool("ydotool"),
    )

    logger.debug(
        "Platform detected: display=%s, clipboard=%s, paste=%s",
        info.display_server.value,
        info.best_clipboard_tool or "none",
        info.best_paste_tool or "none",
    )
    return info
