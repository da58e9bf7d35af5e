"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.posts import router as posts_router
from backend.app.core.errors import normalize_unknown_error
from backend.app.core.logging import EVENT_APP_START, EVENT_CONFIG_LOADED, setup_logging
from backend.app.core.settings import Settings, settings
from backend.app.services.gateway import PostGateway
from backend.app.services.post_store import PostStore, build_store
from backend.app.services.rendering import render_failure

setup_logging(level=getattr(logging, settings.log_level, logging.INFO))
logger = logging.getLogger(__name__)


def create_app(
    store: PostStore | None = None,
    app_settings: Settings = settings,
) -> FastAPI:
    """Build the API around *store*, or a store built from *app_settings*."""

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info(EVENT_APP_START)
        logger.info("%s: %s", EVENT_CONFIG_LOADED, app_settings.safe_dump())
        logger.info("User Posts API ready")
        yield
        logger.info("User Posts API shutting down")

    app = FastAPI(
        title="User Posts API",
        version="0.1.0",
        description="Create and list user posts through a validated request pipeline.",
        lifespan=lifespan,
    )
    app.state.post_gateway = PostGateway(
        store if store is not None else build_store(app_settings)
    )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        """Catch-all handler: log details, render a safe generic ServerError."""
        error = normalize_unknown_error(exc, operation=f"{request.method} {request.url.path}")
        rendered = render_failure(error)
        return Response(
            content=rendered.body,
            status_code=rendered.status_code,
            headers=rendered.headers,
        )

    app.include_router(health_router, tags=["health"])
    app.include_router(posts_router, tags=["posts"])
    return app


app = create_app()
