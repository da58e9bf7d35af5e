"""Post store abstraction with interchangeable backends.

Backends
--------
- **InMemoryPostStore**: process-local list guarded by a lock (default).
- **SqlPostStore**: SQLAlchemy table; blocking work runs in a worker thread.

Both expose the same async surface so the gateway never knows which one it
talks to. Stores raise on failure; translating faults into the error model
is the gateway's job.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from sqlalchemy import Engine, select
from sqlalchemy.orm import sessionmaker

from backend.app.core.logging import EVENT_STORE_INITIALIZED, log_event
from backend.app.core.settings import Settings
from backend.app.db.engine import create_store_engine
from backend.app.models.post import EXAMPLE_POSTS, Post
from backend.app.models.post_record import PostRecord

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Store protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class PostStore(Protocol):
    """Append-only collection of posts with a full-list read."""

    async def append(self, post: Post) -> Post:
        """Store *post* and return it."""
        ...

    async def list_all(self) -> list[Post]:
        """Return every stored post in insertion order."""
        ...


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------


class InMemoryPostStore:
    """Volatile store; reset whenever the process restarts."""

    def __init__(self, posts: Iterable[Post] = ()) -> None:
        self._posts: list[Post] = list(posts)
        self._lock = threading.Lock()

    async def append(self, post: Post) -> Post:
        with self._lock:
            self._posts.append(post)
        return post

    async def list_all(self) -> list[Post]:
        with self._lock:
            return list(self._posts)


# ---------------------------------------------------------------------------
# SQL store
# ---------------------------------------------------------------------------


class SqlPostStore:
    """Posts persisted through SQLAlchemy, one transaction per append."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)
        # In-memory SQLite shares a single connection; serialize access to it.
        self._lock = threading.Lock()

    @classmethod
    def from_url(cls, url: str, *, echo: bool = False) -> SqlPostStore:
        return cls(create_store_engine(url, echo=echo))

    async def append(self, post: Post) -> Post:
        return await asyncio.to_thread(self._append_sync, post)

    async def list_all(self) -> list[Post]:
        return await asyncio.to_thread(self._list_sync)

    def _append_sync(self, post: Post) -> Post:
        with self._lock, self._session_factory() as session, session.begin():
            session.add(PostRecord(user=post.user, title=post.title, text=post.text))
        return post

    def _list_sync(self) -> list[Post]:
        with self._lock, self._session_factory() as session:
            rows = session.scalars(select(PostRecord).order_by(PostRecord.id)).all()
            return [_row_to_post(row) for row in rows]

    def seed(self, posts: Iterable[Post]) -> None:
        """Insert *posts* synchronously; used at construction time only."""
        with self._lock, self._session_factory() as session, session.begin():
            session.add_all(
                PostRecord(user=p.user, title=p.title, text=p.text) for p in posts
            )


def _row_to_post(row: PostRecord) -> Post:
    return Post(user=row.user, title=row.title, text=row.text)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def build_store(settings: Settings) -> PostStore:
    """Construct the store selected by *settings*, seeding it if requested."""
    seed = EXAMPLE_POSTS if settings.seed_example_posts else ()

    store: PostStore
    if settings.store_backend == "sql":
        sql_store = SqlPostStore.from_url(settings.store_url, echo=settings.debug)
        if seed:
            sql_store.seed(seed)
        store = sql_store
    else:
        store = InMemoryPostStore(seed)

    log_event(
        logger, "info", EVENT_STORE_INITIALIZED,
        backend=settings.store_backend,
        seeded=len(seed),
    )
    return store
