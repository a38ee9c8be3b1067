"""Default values, paths, and version constants."""

from __future__ import annotations

import os
from pathlib import Path

# Version
VERSION = "0.1.0"
APP_NAME = "prompt-actions"
APP_TITLE = "AI Quick Actions"

# XDG directories
XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
XDG_DATA_HOME = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))

# Application directories
CONFIG_DIR = XDG_CONFIG_HOME / APP_NAME
DATA_DIR = XDG_DATA_HOME / APP_NAME

# Configuration files
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Data files
STORAGE_FILE = DATA_DIR / "storage.json"
PROMPTS_STORAGE_KEY = "ai-prompts"

# Templates
SELECTION_PLACEHOLDER = "{selection}"
DEFAULT_PROMPT_ICON = "✨"
FALLBACK_PROMPT_ICON = "📄"
PREVIEW_WIDTH = 50

# Provider defaults
API_KEY_ENV_VAR = "PROMPT_ACTIONS_API_KEY"
DEFAULT_API_FORMAT = "gemini"
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com"
GENERATION_TEMPERATURE = 0.3
GENERATION_TOP_K = 40
GENERATION_TOP_P = 0.95
GENERATION_MAX_TOKENS = 8192

# Sent to openai-compatible routers (OpenRouter etc.) to identify the client
CLIENT_REFERER = "https://github.com/prompt-actions/prompt-actions"
CLIENT_TITLE = APP_TITLE

# Clipboard
CLIPBOARD_TIMEOUT = 5  # seconds per clipboard tool invocation

# Web dashboard
WEB_DEFAULT_HOST = "127.0.0.1"
WEB_DEFAULT_PORT = 7866

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
