"""Pydantic model for a user post."""

from pydantic import BaseModel, ConfigDict


class Post(BaseModel):
    """A single user post as stored and returned by the API."""

    model_config = ConfigDict(frozen=True)

    user: str
    title: str
    text: str


EXAMPLE_POSTS: tuple[Post, ...] = (
    Post(user="John", title="First post", text="John's first post"),
    Post(user="John", title="Second post", text="John's second post"),
    Post(user="John", title="Third post", text="John's third post"),
)
"""Posts seeded into a fresh store when ``seed_example_posts`` is enabled."""
