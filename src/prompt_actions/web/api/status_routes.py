"""Status API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from prompt_actions.app import PromptActions
from prompt_actions.constants import APP_TITLE, VERSION
from prompt_actions.web.api.deps import get_actions

router = APIRouter(tags=["status"])


@router.get("/status")
async def get_status(actions: PromptActions = Depends(get_actions)) -> dict:
    """Get application status and version info."""
    return {
        "version": VERSION,
        "status": "running",
        "app_name": APP_TITLE,
        "prompts": len(actions.store.load_all()),
    }
