"""Desktop toasts via notify-send."""

from __future__ import annotations

import logging
import subprocess

from prompt_actions.constants import APP_TITLE

logger = logging.getLogger(__name__)

SUCCESS = "success"
INFO = "info"
FAILURE = "failure"

# kind -> (urgency, expire time in ms, icon name)
_KINDS: dict[str, tuple[str, int, str]] = {
    SUCCESS: ("low", 3000, "dialog-information"),
    INFO: ("normal", 4000, "dialog-information"),
    FAILURE: ("critical", 8000, "dialog-error"),
}

MAX_BODY_CHARS = 300


def notify(title: str, body: str = "", kind: str = INFO) -> bool:
    """Show a short desktop toast.

    Failures are sent as critical and stay on screen longer. Long bodies
    (provider error payloads) are truncated.

    Returns:
        True if notify-send accepted the notification.
    """
    urgency, timeout_ms, icon = _KINDS[kind]
    cmd = [
        "notify-send",
        "--app-name", APP_TITLE,
        "--urgency", urgency,
        "--expire-time", str(timeout_ms),
        "--icon", icon,
        title,
    ]
    if body:
        if len(body) > MAX_BODY_CHARS:
            body = body[:MAX_BODY_CHARS] + "…"
        cmd.append(body)

    try:
        result = subprocess.run(cmd, capture_output=True, timeout=5)
    except FileNotFoundError:
        logger.debug("notify-send not found, skipping notification")
        return False
    except (OSError, subprocess.TimeoutExpired):
        logger.debug("Failed to send notification", exc_info=True)
        return False

    return result.returncode == 0
