"""Request wrapper protocol: cross-cutting concerns around every API call."""
from typing import Awaitable, Callable, Protocol, TypeVar

T = TypeVar("T")


class RequestWrapper(Protocol):
    """Runs a zero-argument coroutine factory, e.g. under a concurrency limit."""

    async def __call__(self, fn: Callable[[], Awaitable[T]]) -> T: ...


async def passthrough(fn: Callable[[], Awaitable[T]]) -> T:
    """Wrapper that adds nothing."""
    return await fn()
