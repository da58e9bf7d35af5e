"""Tests for the create/list pipelines end to end (validation → gateway → render)."""

import asyncio

import pytest
from backend.app.models.envelope import RequestEnvelope
from backend.app.models.post import Post
from backend.app.services.dispatch import create_post, list_posts
from backend.app.services.gateway import PostGateway
from backend.app.services.post_store import InMemoryPostStore

VALID_BODY = '{"user":"John","title":"First Post","text":"John\'s first post."}'
EXPECTED_POST = {"user": "John", "title": "First Post", "text": "John's first post."}


class SpyStore(InMemoryPostStore):
    """In-memory store that counts calls."""

    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    async def append(self, post: Post) -> Post:
        self.calls += 1
        return await super().append(post)

    async def list_all(self) -> list[Post]:
        self.calls += 1
        return await super().list_all()


class BrokenStore:
    async def append(self, post: Post) -> Post:
        raise RuntimeError("write refused")

    async def list_all(self) -> list[Post]:
        raise RuntimeError("read refused")


@pytest.fixture()
def spy() -> SpyStore:
    return SpyStore()


def _create(envelope: RequestEnvelope, store: object):
    return asyncio.run(create_post(envelope, PostGateway(store)))  # type: ignore[arg-type]


def _list(envelope: RequestEnvelope, store: object):
    return asyncio.run(list_posts(envelope, PostGateway(store)))  # type: ignore[arg-type]


# --- short-circuiting ---


@pytest.mark.parametrize("dispatch", [_create, _list])
def test_path_params_rejected_without_gateway_call(dispatch, spy: SpyStore) -> None:
    response = dispatch(RequestEnvelope(path_params={"id": "1"}, raw_body=VALID_BODY), spy)
    assert response.status_code == 400
    assert response.json_body()["message"] == "Error parsing request path params"
    assert spy.calls == 0


@pytest.mark.parametrize("dispatch", [_create, _list])
def test_query_params_rejected_without_gateway_call(dispatch, spy: SpyStore) -> None:
    response = dispatch(RequestEnvelope(query_params={"page": "1"}, raw_body=VALID_BODY), spy)
    assert response.status_code == 400
    assert response.json_body()["errors"] == ["Query params should be empty"]
    assert spy.calls == 0


def test_create_missing_body(spy: SpyStore) -> None:
    response = _create(RequestEnvelope(), spy)
    assert response.status_code == 400
    assert response.json_body() == {
        "message": "Error parsing request body",
        "errors": ["Body cannot be empty"],
    }
    assert spy.calls == 0


def test_create_malformed_body(spy: SpyStore) -> None:
    response = _create(RequestEnvelope(raw_body="{not json"), spy)
    assert response.status_code == 400
    assert response.json_body()["errors"] == ["Invalid JSON"]
    assert spy.calls == 0


# --- success paths ---


def test_create_then_list(spy: SpyStore) -> None:
    created = _create(RequestEnvelope(raw_body=VALID_BODY), spy)
    assert created.status_code == 201
    assert created.headers["Content-Type"] == "application/json"
    assert created.json_body() == EXPECTED_POST

    listed = _list(RequestEnvelope(), spy)
    assert listed.status_code == 200
    assert EXPECTED_POST in listed.json_body()


def test_list_returns_store_in_insertion_order() -> None:
    posts = [Post(user="u", title=f"t{n}", text="x") for n in range(3)]
    response = _list(RequestEnvelope(), InMemoryPostStore(posts))
    assert response.json_body() == [p.model_dump() for p in posts]


def test_list_ignores_body(spy: SpyStore) -> None:
    assert _list(RequestEnvelope(raw_body="anything"), spy).status_code == 200


def test_repeated_lists_are_identical() -> None:
    store = InMemoryPostStore()
    _create(RequestEnvelope(raw_body=VALID_BODY), store)
    first = _list(RequestEnvelope(), store)
    second = _list(RequestEnvelope(), store)
    assert first.body == second.body


def test_concurrent_creates_each_listed_once() -> None:
    store = InMemoryPostStore()
    gateway = PostGateway(store)

    async def scenario():
        bodies = [
            f'{{"user": "u{n}", "title": "t{n}", "text": "x{n}"}}' for n in range(20)
        ]
        responses = await asyncio.gather(
            *(create_post(RequestEnvelope(raw_body=b), gateway) for b in bodies)
        )
        return responses, await list_posts(RequestEnvelope(), gateway)

    responses, listed = asyncio.run(scenario())
    assert all(r.status_code == 201 for r in responses)
    users = [p["user"] for p in listed.json_body()]
    assert sorted(users) == sorted(f"u{n}" for n in range(20))
    assert len(set(users)) == 20


# --- fault translation ---


def test_create_store_fault_yields_500() -> None:
    response = _create(RequestEnvelope(raw_body=VALID_BODY), BrokenStore())
    assert response.status_code == 500
    assert response.json_body() == {
        "message": "Error storing item",
        "errors": ["write refused"],
    }


def test_list_store_fault_yields_500() -> None:
    response = _list(RequestEnvelope(), BrokenStore())
    assert response.status_code == 500
    assert "read refused" in response.json_body()["errors"]


def test_validation_failure_wins_over_broken_store() -> None:
    response = _create(RequestEnvelope(), BrokenStore())
    assert response.status_code == 400
