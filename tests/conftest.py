"""Pytest fixtures for chatstore tests."""

from __future__ import annotations

from collections import deque
from typing import Any

import pytest

from chatstore.infrastructure.persistence.postgres.governor import ConnectionGovernor


# --- Fake connections and pool ---


class FakeCursor:
    """Cursor over canned rows."""

    def __init__(self, rows: list[tuple], rowcount: int | None = None) -> None:
        self._rows = rows
        self.rowcount = len(rows) if rowcount is None else rowcount

    async def fetchone(self) -> tuple | None:
        return self._rows[0] if self._rows else None

    async def fetchall(self) -> list[tuple]:
        return list(self._rows)


class FakeConnection:
    """Records statements; answers non-transaction statements from a queue.

    Queue items are row lists, FakeCursor instances or exceptions to raise.
    ``fail_on`` maps a statement (e.g. "ROLLBACK") to the exception it raises.
    """

    def __init__(self, results: list[Any] | None = None) -> None:
        self.statements: list[tuple[str, Any]] = []
        self.fail_on: dict[str, BaseException] = {}
        self._results: deque[Any] = deque(results or [])
        self.closed = False

    @property
    def sql(self) -> list[str]:
        return [s for s, _ in self.statements]

    async def execute(self, sql: str, params: Any = None) -> FakeCursor:
        self.statements.append((sql, params))
        key = sql.strip()
        if key in self.fail_on:
            raise self.fail_on[key]
        if key in ("BEGIN", "COMMIT", "ROLLBACK"):
            return FakeCursor([])
        result = self._results.popleft() if self._results else []
        if isinstance(result, BaseException):
            raise result
        if hasattr(result, "fetchall"):
            return result
        return FakeCursor(result)

    async def close(self) -> None:
        self.closed = True


class FakePool:
    """In-memory pool port. Records every acquire and release."""

    def __init__(self, *connections: FakeConnection) -> None:
        self._connections: deque[FakeConnection] = deque(connections)
        self.acquired: list[FakeConnection] = []
        self.released: list[tuple[FakeConnection, BaseException | None]] = []

    async def acquire(self) -> tuple[FakeConnection, Any]:
        conn = self._connections.popleft() if self._connections else FakeConnection()
        self.acquired.append(conn)

        async def release(error: BaseException | None = None) -> None:
            self.released.append((conn, error))

        return conn, release

    def push(self, *results: Any) -> FakeConnection:
        """Queue a connection that answers with these results."""
        conn = FakeConnection(list(results))
        self._connections.append(conn)
        return conn

    @property
    def discarded(self) -> list[FakeConnection]:
        return [conn for conn, error in self.released if error is not None]


class FakePasswordHasher:
    async def hash(self, password: str) -> str:
        return f"hashed:{password}"


@pytest.fixture
def fake_pool() -> FakePool:
    return FakePool()


@pytest.fixture
def governor(fake_pool: FakePool) -> ConnectionGovernor:
    return ConnectionGovernor(fake_pool, max_attempts=3, backoff_seconds=0)
