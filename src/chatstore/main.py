"""Application entry point and composition root."""

import asyncio
import logging

from chatstore import __version__
from chatstore.application.ports import PasswordHasher
from chatstore.application.ports.repositories import (
    AdminRepository,
    MessageRepository,
    SessionRepository,
    UserRepository,
)
from chatstore.config import Settings, get_settings
from chatstore.infrastructure.persistence.postgres.admin_repository import (
    PostgresAdminRepository,
)
from chatstore.infrastructure.persistence.postgres.connection import (
    PsycopgConnectionPool,
    create_pool,
)
from chatstore.infrastructure.persistence.postgres.governor import ConnectionGovernor
from chatstore.infrastructure.persistence.postgres.message_repository import (
    PostgresMessageRepository,
)
from chatstore.infrastructure.persistence.postgres.session_repository import (
    PostgresSessionRepository,
)
from chatstore.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)

logger = logging.getLogger(__name__)


class ChatStore:
    """Repositories sharing one governor and pool. Open before use."""

    def __init__(
        self,
        pool: PsycopgConnectionPool,
        governor: ConnectionGovernor,
        *,
        recent_messages_limit: int = 25,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self._pool = pool
        self._governor = governor
        self._users = PostgresUserRepository(governor, password_hasher)
        self._sessions = PostgresSessionRepository(governor)
        self._messages = PostgresMessageRepository(governor, recent_messages_limit)
        self._admin = PostgresAdminRepository(governor)

    @property
    def governor(self) -> ConnectionGovernor:
        return self._governor

    @property
    def users(self) -> UserRepository:
        return self._users

    @property
    def sessions(self) -> SessionRepository:
        return self._sessions

    @property
    def messages(self) -> MessageRepository:
        return self._messages

    @property
    def admin(self) -> AdminRepository:
        return self._admin

    async def open(self) -> None:
        await self._pool.open()

    async def close(self) -> None:
        await self._pool.close()

    async def __aenter__(self) -> "ChatStore":
        await self.open()
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.close()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_chat_store(
    settings: Settings | None = None,
    password_hasher: PasswordHasher | None = None,
) -> ChatStore:
    """Composition root - build pool, governor and repositories."""
    settings = settings or get_settings()
    pool = PsycopgConnectionPool(
        create_pool(
            settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            timeout=settings.pool_timeout_seconds,
        )
    )
    governor = ConnectionGovernor(
        pool,
        max_attempts=settings.deadlock_max_attempts,
        backoff_seconds=settings.deadlock_backoff_seconds,
        max_backoff_seconds=settings.deadlock_max_backoff_seconds,
    )
    return ChatStore(
        pool,
        governor,
        recent_messages_limit=settings.recent_messages_limit,
        password_hasher=password_hasher,
    )


def main() -> None:
    """CLI entry point."""
    print(f"chatstore v{__version__}")


async def print_stats() -> None:
    """Open the pool, print admin stats, close the pool."""
    settings = get_settings()
    configure_logging(settings.log_level)
    async with create_chat_store(settings) as store:
        stats = await store.admin.get_stats()
    logger.info("Fetched admin stats")
    print(f"users: {stats.users_count}")
    print(f"messages: {stats.messages_count}")


def stats() -> None:
    """CLI entry point for admin stats."""
    asyncio.run(print_stats())
