"""Persistence gateway between validated requests and the post store.

This is the only place store exceptions are caught: every fault becomes a
``ServerError`` :class:`Failure` with the stringified cause as its detail.
"""

from __future__ import annotations

import logging
import uuid

from backend.app.core.errors import normalize_store_error
from backend.app.core.logging import (
    EVENT_POST_CREATED,
    EVENT_POSTS_LISTED,
    EVENT_STORE_READ_FAILED,
    EVENT_STORE_WRITE_FAILED,
    log_event,
)
from backend.app.core.result import Result, failure, success
from backend.app.models.post import Post
from backend.app.services.post_store import PostStore

logger = logging.getLogger(__name__)

CREATE_FAILED_MESSAGE = "Error storing item"
LIST_FAILED_MESSAGE = "Error retrieving list of items"


class PostGateway:
    """Async, fault-translating wrapper around a :class:`PostStore`."""

    def __init__(self, store: PostStore) -> None:
        self._store = store

    async def create(self, post: Post) -> Result[Post]:
        correlation_id = str(uuid.uuid4())
        try:
            stored = await self._store.append(post)
        except Exception as exc:
            return failure(
                normalize_store_error(
                    exc,
                    message=CREATE_FAILED_MESSAGE,
                    operation="create_post",
                    event_name=EVENT_STORE_WRITE_FAILED,
                    correlation_id=correlation_id,
                )
            )
        log_event(
            logger, "info", EVENT_POST_CREATED,
            correlation_id=correlation_id,
            title_len=len(stored.title),
            text_len=len(stored.text),
        )
        return success(stored)

    async def list(self) -> Result[list[Post]]:
        correlation_id = str(uuid.uuid4())
        try:
            posts = await self._store.list_all()
        except Exception as exc:
            return failure(
                normalize_store_error(
                    exc,
                    message=LIST_FAILED_MESSAGE,
                    operation="list_posts",
                    event_name=EVENT_STORE_READ_FAILED,
                    correlation_id=correlation_id,
                )
            )
        log_event(
            logger, "info", EVENT_POSTS_LISTED,
            correlation_id=correlation_id,
            count=len(posts),
        )
        return success(list(posts))
