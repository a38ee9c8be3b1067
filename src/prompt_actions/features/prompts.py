"""Prompt template store: a flat ordered collection persisted under one storage key."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from prompt_actions.constants import (
    DEFAULT_PROMPT_ICON,
    FALLBACK_PROMPT_ICON,
    PREVIEW_WIDTH,
    PROMPTS_STORAGE_KEY,
)
from prompt_actions.errors import PromptNotFoundError, ValidationError
from prompt_actions.events import PROMPTS_CHANGED

if TYPE_CHECKING:
    from prompt_actions.events import EventBus
    from prompt_actions.storage import LocalStorage

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class PromptTemplate:
    """A stored prompt with a ``{selection}`` placeholder for the captured text."""

    id: str
    title: str
    body: str
    created_at: int
    icon: str | None = None
    # Stored record had an explicit "icon": null
    null_icon: bool = field(default=False, repr=False, compare=False)

    @property
    def display_icon(self) -> str:
        return self.icon or FALLBACK_PROMPT_ICON

    def preview(self, width: int = PREVIEW_WIDTH) -> str:
        """One-line subtitle for list views."""
        return self.body[:width].replace("\n", " ") + "..."

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "title": self.title, "body": self.body}
        if self.icon is not None or self.null_icon:
            data["icon"] = self.icon
        data["createdAt"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PromptTemplate:
        """Build a template from a stored record.

        ``id`` is coerced to str and ``createdAt`` to int, so a record with a
        numeric id or a string timestamp is rewritten in canonical form on the
        next save. Records this store writes are always canonical and
        round-trip byte-identically, as does an explicit ``"icon": null``.
        """
        return cls(
            id=str(data["id"]),
            title=data["title"],
            body=data["body"],
            created_at=int(data["createdAt"]),
            icon=data.get("icon"),
            null_icon="icon" in data and data["icon"] is None,
        )


def _validate(title: str, body: str) -> None:
    if not title or not title.strip() or not body or not body.strip():
        raise ValidationError("Please fill all fields")


class PromptStore:
    """Owns the canonical prompt collection.

    Every mutation is a whole-collection read-modify-write: the collection is
    loaded, changed, re-serialized and written back under one key. Callers
    get fresh lists back and never mutate the stored collection in place.
    """

    def __init__(self, storage: LocalStorage, event_bus: EventBus | None = None) -> None:
        self._storage = storage
        self._event_bus = event_bus

    def load_all(self) -> list[PromptTemplate]:
        """Deserialize the stored collection. Missing or malformed data reads as empty."""
        stored = self._storage.get_item(PROMPTS_STORAGE_KEY)
        if not stored:
            return []

        try:
            return [PromptTemplate.from_dict(item) for item in json.loads(stored)]
        except (ValueError, TypeError, KeyError):
            logger.warning("Stored prompts under '%s' are malformed, ignoring them", PROMPTS_STORAGE_KEY)
            return []

    def save_all(self, prompts: list[PromptTemplate]) -> bool:
        """Serialize and overwrite the whole collection. Returns False if the write failed."""
        try:
            self._persist(prompts)
        except OSError:
            logger.exception("Failed to save prompts")
            return False
        return True

    def _persist(self, prompts: list[PromptTemplate]) -> None:
        blob = json.dumps([p.to_dict() for p in prompts], ensure_ascii=False)
        self._storage.set_item(PROMPTS_STORAGE_KEY, blob)

        logger.debug("Saved %d prompt(s)", len(prompts))
        if self._event_bus is not None:
            self._event_bus.emit(PROMPTS_CHANGED, prompts=list(prompts))

    def get(self, prompt_id: str) -> PromptTemplate:
        for prompt in self.load_all():
            if prompt.id == prompt_id:
                return prompt
        raise PromptNotFoundError(prompt_id)

    def find(self, id_or_title: str) -> PromptTemplate:
        """Look a prompt up by id, then by case-insensitive title."""
        prompts = self.load_all()
        for prompt in prompts:
            if prompt.id == id_or_title:
                return prompt
        for prompt in prompts:
            if prompt.title.lower() == id_or_title.lower():
                return prompt
        raise PromptNotFoundError(id_or_title)

    def create(self, title: str, body: str, icon: str | None = DEFAULT_PROMPT_ICON) -> PromptTemplate:
        """Validate, assign id/creation time and append a new prompt."""
        _validate(title, body)
        prompts = self.load_all()

        created_at = _now_ms()
        existing = {p.id for p in prompts}
        stamp = created_at
        while str(stamp) in existing:
            stamp += 1

        prompt = PromptTemplate(
            id=str(stamp), title=title, body=body, created_at=created_at, icon=icon
        )
        prompts.append(prompt)
        self._persist(prompts)
        logger.info("Created prompt '%s' (%s)", title, prompt.id)
        return prompt

    def update(
        self, prompt_id: str, title: str, body: str, icon: str | None = None
    ) -> PromptTemplate:
        """Replace the prompt matching ``prompt_id``, keeping its id and creation time."""
        _validate(title, body)
        prompts = self.load_all()

        for i, prompt in enumerate(prompts):
            if prompt.id == prompt_id:
                updated = PromptTemplate(
                    id=prompt.id,
                    title=title,
                    body=body,
                    created_at=prompt.created_at,
                    icon=icon if icon is not None else prompt.icon,
                    null_icon=icon is None and prompt.null_icon,
                )
                prompts[i] = updated
                self._persist(prompts)
                logger.info("Updated prompt '%s' (%s)", title, prompt_id)
                return updated

        raise PromptNotFoundError(prompt_id)

    def delete(self, prompt_id: str, confirm: Callable[[], bool]) -> bool:
        """Remove a prompt once ``confirm()`` agrees. Returns True if removed."""
        prompts = self.load_all()
        remaining = [p for p in prompts if p.id != prompt_id]
        if len(remaining) == len(prompts):
            logger.debug("Prompt %s not found, nothing to delete", prompt_id)
            return False

        if not confirm():
            logger.info("Deletion of prompt %s cancelled", prompt_id)
            return False

        self._persist(remaining)
        logger.info("Deleted prompt %s", prompt_id)
        return True
