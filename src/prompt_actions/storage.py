"""Local key-value storage backed by a single JSON file."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from prompt_actions.constants import STORAGE_FILE

logger = logging.getLogger(__name__)


class LocalStorage:
    """String key → string value store.

    The whole file is rewritten on every change; a write goes to a temporary
    file in the same directory and is moved into place, so readers never see
    a partially written file.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or STORAGE_FILE

    @property
    def path(self) -> Path:
        return self._path

    def all_items(self) -> dict[str, str]:
        """Read every stored item. An unreadable file reads as empty."""
        if not self._path.exists():
            return {}

        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.exception("Failed to read storage from %s", self._path)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed storage file %s", self._path)
            return {}

        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get_item(self, key: str) -> str | None:
        return self.all_items().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self.all_items()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self.all_items()
        if items.pop(key, None) is not None:
            self._write(items)

    def _write(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Saved storage to %s", self._path)
