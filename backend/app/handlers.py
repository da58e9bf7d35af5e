"""Function-as-a-service entry points.

Each handler takes an API Gateway proxy event and returns the
``{"statusCode", "headers", "body"}`` mapping the trigger expects. The
process-wide instance is built lazily from settings by :func:`get_handlers`;
tests construct :class:`PostHandlers` with their own store instead.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from backend.app.core.errors import bad_request
from backend.app.core.logging import EVENT_REQUEST_VALIDATION_FAILED, log_event
from backend.app.core.settings import settings
from backend.app.models.envelope import RequestEnvelope, ResponseEnvelope
from backend.app.services.dispatch import create_post, list_posts
from backend.app.services.gateway import PostGateway
from backend.app.services.post_store import PostStore, build_store
from backend.app.services.rendering import render_failure

logger = logging.getLogger(__name__)

Dispatcher = Callable[[RequestEnvelope, PostGateway], Awaitable[ResponseEnvelope]]


class PostHandlers:
    """Synchronous event handlers bound to one post store."""

    def __init__(self, store: PostStore) -> None:
        self._gateway = PostGateway(store)

    def create_post(self, event: Mapping[str, Any], context: object = None) -> dict[str, Any]:
        return self._handle(create_post, event, operation="create_post")

    def list_posts(self, event: Mapping[str, Any], context: object = None) -> dict[str, Any]:
        return self._handle(list_posts, event, operation="list_posts")

    def _handle(
        self,
        dispatcher: Dispatcher,
        event: Mapping[str, Any],
        *,
        operation: str,
    ) -> dict[str, Any]:
        try:
            envelope = RequestEnvelope.from_event(event)
        except ValidationError as exc:
            log_event(
                logger, "info", EVENT_REQUEST_VALIDATION_FAILED,
                operation=operation,
                reason="malformed_event",
                issue_count=exc.error_count(),
            )
            error = bad_request(
                "Error parsing request",
                *(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors()),
            )
            return render_failure(error).to_event()
        response = asyncio.run(dispatcher(envelope, self._gateway))
        return response.to_event()


@lru_cache(maxsize=1)
def get_handlers() -> PostHandlers:
    """Return the process-wide handlers, building the store on first use."""
    return PostHandlers(build_store(settings))


def create_post_handler(event: Mapping[str, Any], context: object = None) -> dict[str, Any]:
    """Trigger entry point for creating a post."""
    return get_handlers().create_post(event, context)


def list_posts_handler(event: Mapping[str, Any], context: object = None) -> dict[str, Any]:
    """Trigger entry point for listing posts."""
    return get_handlers().list_posts(event, context)
