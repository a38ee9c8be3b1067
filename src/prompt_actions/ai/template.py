"""Placeholder substitution for prompt templates."""

from __future__ import annotations

from prompt_actions.constants import SELECTION_PLACEHOLDER


def substitute(body: str, text: str) -> str:
    """Replace every ``{selection}`` in ``body`` with ``text``.

    Plain string replacement: the text is inserted verbatim and is never
    scanned for further placeholders.
    """
    return body.replace(SELECTION_PLACEHOLDER, text)
