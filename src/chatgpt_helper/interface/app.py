"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from chatgpt_helper.interface.dependencies import shutdown, startup
from chatgpt_helper.interface.error_handlers import register_error_handlers
from chatgpt_helper.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Bootstrap the helper on startup, release its client on shutdown."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="ChatGPT Helper",
        version="1.0.0",
        description=(
            "Generates free-text, structured and multi-turn responses with "
            "OpenAI chat completions, using administrator-configured defaults."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
