"""Structured logging baseline and event taxonomy.

Event taxonomy (minimum set)::

    app_start                 : application process starting
    config_loaded             : settings resolved successfully
    store_initialized         : post store constructed (backend, seed count)
    request_validation_failed : a validator rejected the inbound envelope
    store_write_failed        : store raised while appending a post
    store_read_failed         : store raised while listing posts
    post_created              : post appended to the store
    posts_listed              : full post list returned
    unknown_error             : unhandled exception reached the HTTP adapter

Rules:
    - Never log post content; log lengths and counts instead.
    - Failures carry ``error_category`` and ``correlation_id``.

Usage::

    from backend.app.core.logging import log_event
    log_event(logger, "info", "post_created",
              correlation_id=cid, title_len=12)
"""

import logging
import sys

EVENT_APP_START = "app_start"
EVENT_CONFIG_LOADED = "config_loaded"
EVENT_STORE_INITIALIZED = "store_initialized"
EVENT_REQUEST_VALIDATION_FAILED = "request_validation_failed"
EVENT_STORE_WRITE_FAILED = "store_write_failed"
EVENT_STORE_READ_FAILED = "store_read_failed"
EVENT_POST_CREATED = "post_created"
EVENT_POSTS_LISTED = "posts_listed"
EVENT_UNKNOWN_ERROR = "unknown_error"


_HANDLER_ATTR = "_user_posts_api"


def setup_logging(level: int = logging.INFO) -> None:
    """Configure root logger with a simple structured format.

    Safe to call multiple times: only adds the handler once.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for h in root.handlers:
        if getattr(h, _HANDLER_ATTR, False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)


def log_event(
    logger: logging.Logger,
    level: str,
    event_name: str,
    **kwargs: object,
) -> None:
    """Emit a structured log line with consistent ``event_name: key=value`` format.

    Parameters
    ----------
    logger:
        The logger instance (provides the component via ``logger.name``).
    level:
        Log level name: ``"debug"``, ``"info"``, ``"warning"``, ``"error"``
        or ``"exception"``.
    event_name:
        Canonical event name (e.g. ``"store_write_failed"``).
    **kwargs:
        Arbitrary key-value pairs appended as ``key=value``.
    """
    parts = " ".join(f"{k}={v}" for k, v in kwargs.items())
    message = f"{event_name}: {parts}" if parts else event_name
    log_fn = getattr(logger, level, logger.info)
    log_fn(message)
