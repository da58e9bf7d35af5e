"""Error model shared by every stage of the request pipeline.

Failures are values, not exceptions:
- Validators build ``BadRequest`` errors directly.
- The persistence gateway turns store exceptions into ``ServerError`` via
  :func:`normalize_store_error`.
- The renderer reads ``classification`` to pick the response status.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from backend.app.core.logging import EVENT_UNKNOWN_ERROR, log_event

logger = logging.getLogger(__name__)


class ErrorClassification(StrEnum):
    """Coarse error category used to select a response status."""

    bad_request = "bad_request"
    server_error = "server_error"

    @property
    def http_status(self) -> int:
        if self is ErrorClassification.bad_request:
            return 400
        return 500


@dataclass(frozen=True)
class OperationError:
    """Client-facing diagnostic: a message plus ordered detail strings."""

    message: str
    details: tuple[str, ...] = field(default_factory=tuple)
    classification: ErrorClassification = ErrorClassification.server_error

    @property
    def http_status(self) -> int:
        return self.classification.http_status


def bad_request(message: str, *details: str) -> OperationError:
    """Build a client-attributable error."""
    return OperationError(
        message=message,
        details=tuple(details),
        classification=ErrorClassification.bad_request,
    )


def server_error(message: str, *details: str) -> OperationError:
    """Build a server-side error."""
    return OperationError(
        message=message,
        details=tuple(details),
        classification=ErrorClassification.server_error,
    )


def normalize_store_error(
    exc: BaseException,
    *,
    message: str,
    operation: str,
    event_name: str,
    correlation_id: str | None = None,
) -> OperationError:
    """Translate a store fault into a ``ServerError`` and log it.

    The stringified cause is the only detail exposed to the client.
    """
    error = server_error(message, str(exc))
    log_event(
        logger, "error", event_name,
        operation=operation,
        error_category=error.classification,
        correlation_id=correlation_id or "N/A",
        detail=f"{type(exc).__name__}: {exc}",
    )
    return error


def normalize_unknown_error(
    exc: BaseException,
    *,
    operation: str,
    correlation_id: str | None = None,
) -> OperationError:
    """Normalize an unexpected error into a safe generic message."""
    log_event(
        logger, "exception", EVENT_UNKNOWN_ERROR,
        operation=operation,
        error_category=ErrorClassification.server_error,
        correlation_id=correlation_id or "N/A",
        detail=f"{type(exc).__name__}: {exc}",
    )
    return server_error("An unexpected error occurred. Please try again.")
