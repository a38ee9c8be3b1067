"""FastAPI web server for the prompt dashboard."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from prompt_actions.constants import VERSION
from prompt_actions.web.api.config_routes import router as config_router
from prompt_actions.web.api.prompts_routes import router as prompts_router
from prompt_actions.web.api.status_routes import router as status_router

if TYPE_CHECKING:
    from prompt_actions.app import PromptActions

logger = logging.getLogger(__name__)


def create_app(actions: PromptActions) -> FastAPI:
    """Build the dashboard app around one PromptActions instance."""
    app = FastAPI(
        title="Prompt Actions Dashboard",
        version=VERSION,
        docs_url="/api/docs",
        redoc_url=None,
    )
    app.state.actions = actions

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"http://(127\.0\.0\.1|localhost)(:\d+)?",
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API routes
    app.include_router(status_router, prefix="/api")
    app.include_router(prompts_router, prefix="/api")
    app.include_router(config_router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def index() -> RedirectResponse:
        return RedirectResponse(url="/api/docs")

    return app


def run_server(actions: PromptActions, host: str = "127.0.0.1", port: int = 7866) -> None:
    """Start the web dashboard server."""
    import uvicorn

    logger.warning("Starting Prompt Actions dashboard on http://%s:%d", host, port)
    uvicorn.run(create_app(actions), host=host, port=port, log_level="info")
