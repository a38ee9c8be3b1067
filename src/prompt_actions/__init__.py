"""prompt-actions: run saved LLM prompt templates against the selected text."""

from prompt_actions.constants import VERSION

__version__ = VERSION
