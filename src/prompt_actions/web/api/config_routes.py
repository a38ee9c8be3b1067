"""Configuration API routes."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from prompt_actions.ai.factory import ApiFormat
from prompt_actions.app import PromptActions
from prompt_actions.config import merge_section
from prompt_actions.web.api.deps import get_actions

router = APIRouter(tags=["config"])


@router.get("/config")
async def get_config(actions: PromptActions = Depends(get_actions)) -> dict:
    """Get the configuration with the API key masked."""
    config = actions.config
    return {
        "provider": config.provider.masked(),
        "web": asdict(config.web),
        "ui": asdict(config.ui),
    }


@router.put("/config")
async def update_config(
    data: dict[str, Any], actions: PromptActions = Depends(get_actions)
) -> dict:
    """Update configuration with partial data. Merges with existing config."""
    config = actions.config

    provider = data.get("provider")
    if isinstance(provider, dict):
        provider = dict(provider)
        # A form saved back after GET carries the masked key, not the real one
        api_key = provider.get("api_key")
        if isinstance(api_key, str) and (
            api_key == config.provider.masked()["api_key"] or api_key.endswith("…")
        ):
            del provider["api_key"]
        if "api_format" in provider:
            try:
                ApiFormat.parse(provider["api_format"])
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e)) from e
        merge_section(config.provider, provider)

    if isinstance(data.get("ui"), dict):
        merge_section(config.ui, data["ui"])

    actions.save_config()
    return {"status": "ok", "message": "Configuration saved"}
