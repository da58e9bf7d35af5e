"""Per-operation pipelines: validate, call the gateway, render.

Dispatchers hold no state. Rendering happens exactly once per request, with
either the success value or the first failure encountered.
"""

from __future__ import annotations

from backend.app.models.envelope import (
    RequestEnvelope,
    ResponseEnvelope,
    ValidatedCreateRequest,
)
from backend.app.services.gateway import PostGateway
from backend.app.services.rendering import StatusCode, render_failure, render_success
from backend.app.services.validation import validate_create_request, validate_list_request


async def create_post(envelope: RequestEnvelope, gateway: PostGateway) -> ResponseEnvelope:
    """Create a post from *envelope*; 201 with the stored post on success."""

    async def store(request: ValidatedCreateRequest):
        return await gateway.create(request.body)

    result = await validate_create_request(envelope).bind_async(store)
    return result.fold(
        render_failure,
        lambda post: render_success(StatusCode.CREATED, post),
    )


async def list_posts(envelope: RequestEnvelope, gateway: PostGateway) -> ResponseEnvelope:
    """List every stored post; 200 with the posts in insertion order."""

    async def fetch(_: RequestEnvelope):
        return await gateway.list()

    result = await validate_list_request(envelope).bind_async(fetch)
    return result.fold(
        render_failure,
        lambda posts: render_success(StatusCode.OK, posts),
    )
