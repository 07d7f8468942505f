"""PostgreSQL async connection pool."""

import logging

from psycopg import AsyncConnection
from psycopg_pool import AsyncConnectionPool

from chatstore.application.ports import Release

logger = logging.getLogger(__name__)


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    timeout: float = 30.0,
) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False. Caller must call await pool.open()
    before use (e.g. via ChatStore.open()). Connections run in autocommit
    mode so transactions are delimited by explicit BEGIN/COMMIT/ROLLBACK.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        kwargs={"autocommit": True},
        open=False,
    )


class PsycopgConnectionPool:
    """Pool port over psycopg_pool.

    A discarded connection is closed before it is handed back; psycopg_pool
    drops closed connections and opens a replacement in the background.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def acquire(self) -> tuple[AsyncConnection, Release]:
        conn = await self._pool.getconn()
        released = False

        async def release(error: BaseException | None = None) -> None:
            nonlocal released
            if released:
                raise RuntimeError("Connection already released")
            released = True
            if error is not None:
                logger.debug("Closing connection before return: %r", error)
                await conn.close()
            await self._pool.putconn(conn)

        return conn, release

    async def open(self) -> None:
        await self._pool.open()

    async def close(self) -> None:
        await self._pool.close()
