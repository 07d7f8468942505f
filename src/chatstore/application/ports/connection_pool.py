"""Connection pool port - lease and return store connections."""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

# release(None) returns a healthy connection; release(error) discards it
Release = Callable[[BaseException | None], Awaitable[None]]


class ConnectionPool(Protocol):
    """Port for the shared pool of store connections."""

    async def acquire(self) -> tuple[Any, Release]: ...
