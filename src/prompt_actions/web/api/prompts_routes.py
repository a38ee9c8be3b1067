"""Prompt management and run API routes."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from prompt_actions.app import PromptActions
from prompt_actions.constants import DEFAULT_PROMPT_ICON
from prompt_actions.errors import (
    ApiError,
    InputUnavailableError,
    MissingCredentialError,
    PromptNotFoundError,
    ValidationError,
)
from prompt_actions.features.prompts import PromptTemplate
from prompt_actions.web.api.deps import get_actions

logger = logging.getLogger(__name__)

router = APIRouter(tags=["prompts"])


class CreatePromptRequest(BaseModel):
    title: str
    body: str
    icon: str | None = None


class UpdatePromptRequest(BaseModel):
    title: str
    body: str
    icon: str | None = None


class RunPromptRequest(BaseModel):
    text: str | None = None


def _serialize(prompt: PromptTemplate, preview_width: int) -> dict[str, Any]:
    data = prompt.to_dict()
    data["displayIcon"] = prompt.display_icon
    data["preview"] = prompt.preview(preview_width)
    return data


@router.get("/prompts")
async def list_prompts(actions: PromptActions = Depends(get_actions)) -> dict:
    """Get all prompts in insertion order."""
    width = actions.config.ui.preview_width
    return {"prompts": [_serialize(p, width) for p in actions.store.load_all()]}


@router.post("/prompts")
async def create_prompt(
    req: CreatePromptRequest, actions: PromptActions = Depends(get_actions)
) -> dict:
    """Create a new prompt."""
    try:
        prompt = actions.store.create(req.title, req.body, icon=req.icon or DEFAULT_PROMPT_ICON)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"status": "ok", "message": "Prompt created", "prompt": prompt.to_dict()}


@router.put("/prompts/{prompt_id}")
async def update_prompt(
    prompt_id: str, req: UpdatePromptRequest, actions: PromptActions = Depends(get_actions)
) -> dict:
    """Replace the title/body (and optionally icon) of a prompt."""
    try:
        prompt = actions.store.update(prompt_id, req.title, req.body, icon=req.icon)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except PromptNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"status": "ok", "message": "Prompt updated", "prompt": prompt.to_dict()}


@router.delete("/prompts/{prompt_id}")
async def delete_prompt(
    prompt_id: str, confirm: bool = False, actions: PromptActions = Depends(get_actions)
) -> dict:
    """Delete a prompt. Requires ``?confirm=true``."""
    if not confirm:
        raise HTTPException(status_code=409, detail="Deletion requires confirm=true")

    if actions.store.delete(prompt_id, confirm=lambda: True):
        return {"status": "ok", "message": "Prompt deleted"}
    raise HTTPException(status_code=404, detail=f"Prompt '{prompt_id}' not found")


@router.post("/prompts/{prompt_id}/run")
def run_prompt(
    prompt_id: str,
    req: RunPromptRequest | None = None,
    actions: PromptActions = Depends(get_actions),
) -> dict:
    """Run a prompt against the given text, or the current selection/clipboard."""
    text = req.text if req is not None else None
    try:
        result = actions.run(prompt_id, text=text)
    except PromptNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except (MissingCredentialError, InputUnavailableError) as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ApiError as e:
        raise HTTPException(
            status_code=502,
            detail={"message": str(e), "status_code": e.status_code, "body": e.body},
        ) from e
    except Exception as e:
        logger.exception("Running prompt %s failed", prompt_id)
        raise HTTPException(status_code=500, detail=f"Processing failed: {e}") from e

    return {
        "status": "ok",
        "title": result.title,
        "result": result.text,
        "original": result.original_text,
    }
