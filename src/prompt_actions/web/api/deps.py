"""Shared route dependencies."""

from __future__ import annotations

from fastapi import Request

from prompt_actions.app import PromptActions


def get_actions(request: Request) -> PromptActions:
    return request.app.state.actions
