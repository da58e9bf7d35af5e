"""Two-variant result type for the request pipeline.

Every step that can fail returns either :class:`Success` or :class:`Failure`.
Chaining on a ``Failure`` never runs the next step and hands back the very
same ``Failure`` object, so the first error reaches the renderer unaltered.

Usage::

    result = (
        success(envelope)
        .bind(path_params_absent)
        .bind(query_params_absent)
    )
    result = await result.bind_async(gateway.create)
    response = result.fold(render_failure, on_success)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from backend.app.core.errors import OperationError

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful step outcome."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    def bind(self, fn: Callable[[T], Result[U]]) -> Result[U]:
        return fn(self.value)

    async def bind_async(self, fn: Callable[[T], Awaitable[Result[U]]]) -> Result[U]:
        return await fn(self.value)

    def map(self, fn: Callable[[T], U]) -> Result[U]:
        return Success(fn(self.value))

    def fold(
        self,
        on_failure: Callable[[OperationError], R],
        on_success: Callable[[T], R],
    ) -> R:
        return on_success(self.value)


@dataclass(frozen=True)
class Failure:
    """Failed step outcome; propagated as-is through every later step."""

    error: OperationError

    @property
    def is_success(self) -> bool:
        return False

    def bind(self, fn: Callable[[object], Result[U]]) -> Failure:
        return self

    async def bind_async(self, fn: Callable[[object], Awaitable[Result[U]]]) -> Failure:
        return self

    def map(self, fn: Callable[[object], U]) -> Failure:
        return self

    def fold(
        self,
        on_failure: Callable[[OperationError], R],
        on_success: Callable[[object], R],
    ) -> R:
        return on_failure(self.error)


Result = Success[T] | Failure
"""Discriminated union returned by validators and the gateway."""


def success(value: T) -> Success[T]:
    """Wrap *value* as a successful result."""
    return Success(value)


def failure(error: OperationError) -> Failure:
    """Wrap *error* as a failed result."""
    return Failure(error)
