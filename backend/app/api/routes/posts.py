"""POST/GET /userpost: HTTP adapter over the post dispatchers."""

from fastapi import APIRouter, Depends, Request, Response

from backend.app.core.errors import bad_request
from backend.app.models.envelope import RequestEnvelope, ResponseEnvelope
from backend.app.services.dispatch import create_post, list_posts
from backend.app.services.gateway import PostGateway
from backend.app.services.rendering import render_failure
from backend.app.services.validation import BODY_MESSAGE

router = APIRouter()


def get_gateway(request: Request) -> PostGateway:
    """FastAPI dependency returning the gateway bound to the app's store."""
    return request.app.state.post_gateway


async def _envelope_from_request(
    request: Request, *, strict_body: bool = True,
) -> RequestEnvelope | None:
    """Map an HTTP request onto an envelope.

    Returns ``None`` when *strict_body* is set and the body is not UTF-8;
    otherwise undecodable bytes are replaced.
    """
    raw = await request.body()
    try:
        errors = "strict" if strict_body else "replace"
        raw_body = raw.decode("utf-8", errors=errors) if raw else None
    except UnicodeDecodeError:
        return None
    return RequestEnvelope(
        path_params=dict(request.path_params) or None,
        query_params=dict(request.query_params) or None,
        raw_body=raw_body,
    )


def _to_response(envelope: ResponseEnvelope) -> Response:
    return Response(
        content=envelope.body,
        status_code=envelope.status_code,
        headers=envelope.headers,
    )


@router.post("/userpost")
async def create_user_post(
    request: Request, gateway: PostGateway = Depends(get_gateway),
) -> Response:
    """Create a post from the raw JSON body."""
    envelope = await _envelope_from_request(request)
    if envelope is None:
        return _to_response(render_failure(bad_request(BODY_MESSAGE, "Invalid JSON")))
    return _to_response(await create_post(envelope, gateway))


@router.get("/userpost")
async def list_user_posts(
    request: Request, gateway: PostGateway = Depends(get_gateway),
) -> Response:
    """Return every stored post in insertion order; the body is ignored."""
    envelope = await _envelope_from_request(request, strict_body=False)
    assert envelope is not None  # guaranteed when strict_body is False
    return _to_response(await list_posts(envelope, gateway))
