"""PostgreSQL admin panel queries."""

from chatstore.domain.entities import Stats
from chatstore.infrastructure.persistence.postgres.governor import ConnectionGovernor


class PostgresAdminRepository:
    """Aggregates for the admin panel."""

    def __init__(self, governor: ConnectionGovernor) -> None:
        self._governor = governor

    async def get_stats(self) -> Stats:
        """Count users and visible messages."""
        r = await self._governor.query_one(
            "SELECT "
            "(SELECT COUNT(*) FROM users) AS users_count, "
            "(SELECT COUNT(*) FROM messages WHERE is_hidden = false) AS messages_count"
        )
        return Stats(users_count=r[0], messages_count=r[1])
