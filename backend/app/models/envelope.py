"""Inbound request and outbound response envelopes.

The inbound shape mirrors an API Gateway proxy event: only
``pathParameters``, ``queryStringParameters`` and ``body`` are read, and a
missing key counts as absent.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.post import Post

DEFAULT_HEADERS: dict[str, str] = {"Content-Type": "application/json"}


class RequestEnvelope(BaseModel):
    """Raw inbound request: path params, query params and undecoded body."""

    model_config = ConfigDict(frozen=True)

    path_params: dict[str, str] | None = None
    query_params: dict[str, str] | None = None
    raw_body: str | None = None

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> RequestEnvelope:
        """Build an envelope from an API Gateway proxy event, ignoring other keys."""
        return cls(
            path_params=event.get("pathParameters"),
            query_params=event.get("queryStringParameters"),
            raw_body=event.get("body"),
        )


class ValidatedCreateRequest(RequestEnvelope):
    """Envelope whose body has been decoded into a :class:`Post`."""

    body: Post


class ResponseEnvelope(BaseModel):
    """Rendered response: status, headers and a JSON text body."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HEADERS))
    body: str

    def json_body(self) -> Any:
        """Decode :attr:`body` back into plain data."""
        return json.loads(self.body)

    def to_event(self) -> dict[str, Any]:
        """Return the function-as-a-service response shape."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
        }
