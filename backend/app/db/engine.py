"""SQLAlchemy engine construction for the SQL-backed post store."""

import logging

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.pool import StaticPool

from backend.app.db.base import Base
from backend.app.models import post_record as _post_record  # noqa: F401

logger = logging.getLogger(__name__)


class StoreInitError(Exception):
    """Raised when the SQL store cannot be initialized."""


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/") == "sqlite:")


def create_store_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for *url* and make sure the schema exists.

    In-memory SQLite shares one connection across threads so every session
    sees the same database.

    Raises:
        StoreInitError: If the database cannot be opened or the schema created.
    """
    kwargs: dict[str, object] = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    if _is_memory_sqlite(url):
        kwargs["poolclass"] = StaticPool

    try:
        engine = create_engine(url, **kwargs)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        Base.metadata.create_all(engine)
    except Exception as exc:
        msg = f"Cannot open post store at '{url}': {exc}"
        logger.error("store_init_failed: %s", msg)
        raise StoreInitError(msg) from exc

    logger.info("store_engine_ready: url=%s", engine.url.render_as_string(hide_password=True))
    return engine
