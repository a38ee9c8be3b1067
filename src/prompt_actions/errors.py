"""Exception types raised by the prompt store and the prompt runner."""

from __future__ import annotations


class PromptActionsError(Exception):
    """Base class for all errors surfaced to the user."""


class ValidationError(PromptActionsError):
    """A required template field is missing at create/edit time."""


class PromptNotFoundError(PromptActionsError):
    """No stored template matches the given id."""

    def __init__(self, prompt_id: str) -> None:
        super().__init__(f"Prompt '{prompt_id}' not found")
        self.prompt_id = prompt_id


class InputUnavailableError(PromptActionsError):
    """Neither the selection nor the clipboard holds any text."""

    def __init__(self, message: str = "Please select text or copy to clipboard") -> None:
        super().__init__(message)


class MissingCredentialError(PromptActionsError):
    """No API key is configured."""

    def __init__(self, message: str = "Please set API Key in preferences") -> None:
        super().__init__(message)


class ApiError(PromptActionsError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"API request failed: {status_code} - {body}")
        self.status_code = status_code
        self.body = body
