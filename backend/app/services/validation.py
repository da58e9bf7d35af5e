"""Request validators for the post operations.

Each validator is a pure function from an envelope to a :data:`Result`.
Validators never raise; they are chained with ``Result.bind`` so the first
failure short-circuits the rest of the chain.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from backend.app.core.errors import bad_request
from backend.app.core.logging import EVENT_REQUEST_VALIDATION_FAILED, log_event
from backend.app.core.result import Failure, Result, failure, success
from backend.app.models.envelope import RequestEnvelope, ValidatedCreateRequest
from backend.app.models.post import Post

logger = logging.getLogger(__name__)

PATH_PARAMS_MESSAGE = "Error parsing request path params"
QUERY_PARAMS_MESSAGE = "Error parsing request query params"
BODY_MESSAGE = "Error parsing request body"

_JSON_VALUE: TypeAdapter[Any] = TypeAdapter(Any)


def path_params_absent(envelope: RequestEnvelope) -> Result[RequestEnvelope]:
    """Reject any envelope carrying path params, even an empty mapping."""
    if envelope.path_params is not None:
        return failure(bad_request(PATH_PARAMS_MESSAGE, "Path params should be empty"))
    return success(envelope)


def query_params_absent(envelope: RequestEnvelope) -> Result[RequestEnvelope]:
    """Reject any envelope carrying query params, even an empty mapping."""
    if envelope.query_params is not None:
        return failure(bad_request(QUERY_PARAMS_MESSAGE, "Query params should be empty"))
    return success(envelope)


def body_present(envelope: RequestEnvelope) -> Result[RequestEnvelope]:
    if envelope.raw_body is None:
        return failure(bad_request(BODY_MESSAGE, "Body cannot be empty"))
    return success(envelope)


def body_parses(
    envelope: RequestEnvelope,
) -> Result[tuple[RequestEnvelope, Any]]:
    """Decode the raw body as JSON, pairing the envelope with the decoded value.

    Syntax errors and nesting past the parser's depth limit both fail here.
    """
    try:
        decoded = _JSON_VALUE.validate_json(envelope.raw_body or "")
    except ValidationError:
        return failure(bad_request(BODY_MESSAGE, "Invalid JSON"))
    return success((envelope, decoded))


def body_is_post(
    parsed: tuple[RequestEnvelope, Any],
) -> Result[ValidatedCreateRequest]:
    """Check the decoded body against the :class:`Post` schema."""
    envelope, decoded = parsed
    try:
        post = Post.model_validate(decoded)
    except ValidationError as exc:
        return failure(bad_request(BODY_MESSAGE, *_field_issues(exc)))
    return success(
        ValidatedCreateRequest(
            path_params=envelope.path_params,
            query_params=envelope.query_params,
            raw_body=envelope.raw_body,
            body=post,
        )
    )


def _field_issues(exc: ValidationError) -> list[str]:
    issues: list[str] = []
    for issue in exc.errors():
        location = ".".join(str(part) for part in issue.get("loc", ())) or "body"
        issues.append(f"{location}: {issue.get('msg', 'Invalid value')}")
    return issues


def validate_list_request(envelope: RequestEnvelope) -> Result[RequestEnvelope]:
    """Validate an inbound "list posts" envelope."""
    result = (
        success(envelope)
        .bind(path_params_absent)
        .bind(query_params_absent)
    )
    _log_rejection(result, operation="list_posts")
    return result


def validate_create_request(
    envelope: RequestEnvelope,
) -> Result[ValidatedCreateRequest]:
    """Validate and decode an inbound "create post" envelope."""
    result = (
        success(envelope)
        .bind(path_params_absent)
        .bind(query_params_absent)
        .bind(body_present)
        .bind(body_parses)
        .bind(body_is_post)
    )
    _log_rejection(result, operation="create_post")
    return result


def _log_rejection(result: Result[Any], *, operation: str) -> None:
    if isinstance(result, Failure):
        log_event(
            logger, "info", EVENT_REQUEST_VALIDATION_FAILED,
            operation=operation,
            error_category=result.error.classification,
            reason=result.error.message,
        )
