"""Connection governor - leased connections, transactions and deadlock retry."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar

from psycopg.errors import DeadlockDetected

from chatstore.application.ports import ConnectionPool
from chatstore.domain.exceptions import PoolUnsafeError, TooManyRows

logger = logging.getLogger(__name__)

T = TypeVar("T")

Work = Callable[[Any], Awaitable[T]]
Params = Sequence[Any] | dict[str, Any] | None

DISCARD_NOTE = "Connection was removed from the pool after an unrecoverable client error"


async def fetch_one(conn: Any, sql: str, params: Params = None) -> tuple | None:
    """Run statement on conn, return its only row or None."""
    cur = await conn.execute(sql, params)
    rows = await cur.fetchall()
    if len(rows) > 1:
        raise TooManyRows(len(rows))
    return rows[0] if rows else None


async def fetch_many(conn: Any, sql: str, params: Params = None) -> list[tuple]:
    """Run statement on conn, return all rows in order."""
    cur = await conn.execute(sql, params)
    return list(await cur.fetchall())


async def run_statement(conn: Any, sql: str, params: Params = None) -> int:
    """Run statement without a result set on conn, return affected row count."""
    cur = await conn.execute(sql, params)
    return cur.rowcount


class ConnectionGovernor:
    """Runs work units against leased connections.

    Every attempt acquires exactly one connection and releases it exactly once.
    Deadlocks are retried with a fresh connection up to ``max_attempts`` times.
    Errors wrapped in PoolUnsafeError get their connection discarded and are
    never retried.
    """

    def __init__(
        self,
        pool: ConnectionPool,
        *,
        max_attempts: int = 5,
        backoff_seconds: float = 0.05,
        max_backoff_seconds: float = 1.0,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._pool = pool
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._max_backoff_seconds = max_backoff_seconds

    def _delay(self, attempt: int) -> float:
        return min(self._backoff_seconds * (2 ** (attempt - 1)), self._max_backoff_seconds)

    async def with_client(self, work: Work[T]) -> T:
        """Run work(conn) on a leased connection, retrying on deadlock."""
        attempt = 1
        while True:
            try:
                return await self._attempt(work)
            except PoolUnsafeError as exc:
                # connection already discarded, never retried
                raise exc.error from exc.__cause__
            except DeadlockDetected as exc:
                if attempt >= self._max_attempts:
                    logger.error("Deadlock persisted after %s attempts: %s", attempt, exc)
                    raise
                delay = self._delay(attempt)
                logger.warning(
                    "Deadlock detected (attempt %s/%s), retrying in %.2fs",
                    attempt,
                    self._max_attempts,
                    delay,
                )
                await asyncio.sleep(delay)
                attempt += 1

    async def _attempt(self, work: Work[T]) -> T:
        conn, release = await self._pool.acquire()
        logger.debug("Acquired connection %r", conn)
        try:
            result = await work(conn)
        except PoolUnsafeError as exc:
            if not exc.discard_connection:
                await release(None)
                logger.debug("Released connection %r", conn)
                raise exc.error from exc.__cause__
            logger.error("Discarding connection %r: %s", conn, exc.error)
            await release(exc.error)
            logger.debug("Released connection %r for discard", conn)
            exc.error.add_note(DISCARD_NOTE)
            raise
        except Exception:
            await release(None)
            logger.debug("Released connection %r", conn)
            raise
        except BaseException as exc:
            # cancelled mid-statement, client state unknown
            await release(exc)
            logger.debug("Released connection %r for discard", conn)
            raise
        await release(None)
        logger.debug("Released connection %r", conn)
        return result

    async def with_transaction(self, work: Work[T]) -> T:
        """Run work(conn) between BEGIN and COMMIT, rolling back on failure."""

        async def transactional(conn: Any) -> T:
            try:
                await conn.execute("BEGIN")
                result = await work(conn)
                await conn.execute("COMMIT")
                return result
            except Exception as exc:
                try:
                    await conn.execute("ROLLBACK")
                except Exception as rollback_exc:
                    raise PoolUnsafeError(rollback_exc) from exc
                raise

        return await self.with_client(transactional)

    async def query_one(self, sql: str, params: Params = None) -> tuple | None:
        return await self.with_client(lambda conn: fetch_one(conn, sql, params))

    async def query_many(self, sql: str, params: Params = None) -> list[tuple]:
        return await self.with_client(lambda conn: fetch_many(conn, sql, params))

    async def execute(self, sql: str, params: Params = None) -> int:
        return await self.with_client(lambda conn: run_statement(conn, sql, params))
