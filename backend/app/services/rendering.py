"""Render pipeline outcomes into response envelopes."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import TypeAdapter

from backend.app.core.errors import OperationError
from backend.app.models.envelope import DEFAULT_HEADERS, ResponseEnvelope

# Serializes models, containers of models and plain JSON values alike.
_PAYLOAD: TypeAdapter[Any] = TypeAdapter(Any)


class StatusCode(IntEnum):
    OK = 200
    CREATED = 201
    BAD_REQUEST = 400
    SERVER_ERROR = 500


def _dump(value: Any) -> str:
    return _PAYLOAD.dump_json(value).decode()


def render_success(status: int, value: Any) -> ResponseEnvelope:
    """Serialize *value* as the JSON body with *status* and default headers."""
    return ResponseEnvelope(
        status_code=int(status),
        headers=dict(DEFAULT_HEADERS),
        body=_dump(value),
    )


def render_failure(error: OperationError) -> ResponseEnvelope:
    """Render ``{message, errors}`` with the status of the error's classification."""
    return ResponseEnvelope(
        status_code=error.http_status,
        headers=dict(DEFAULT_HEADERS),
        body=_dump({"message": error.message, "errors": list(error.details)}),
    )
