"""PostgreSQL session repository implementation."""

from uuid import UUID, uuid4

from chatstore.domain.entities import Session
from chatstore.domain.guards import optional_str, require_int, require_str, require_uuid
from chatstore.infrastructure.persistence.postgres.governor import ConnectionGovernor

SESSION_COLUMNS = (
    "id, user_id, host(ip_address), user_agent, created_at, expired_at, logged_out_at"
)


def row_to_session(r: tuple) -> Session:
    return Session(
        id=r[0],
        user_id=r[1],
        ip_address=r[2],
        user_agent=r[3],
        created_at=r[4],
        expired_at=r[5],
        logged_out_at=r[6],
    )


class PostgresSessionRepository:
    """Session repository implementation."""

    def __init__(self, governor: ConnectionGovernor) -> None:
        self._governor = governor

    async def create(
        self,
        user_id: int,
        ip_address: str,
        interval: str,
        user_agent: str | None = None,
    ) -> Session:
        """Create session expiring after interval (a Postgres interval, e.g. '2 weeks')."""
        require_int(user_id, "user_id")
        require_str(ip_address, "ip_address")
        require_str(interval, "interval")
        optional_str(user_agent, "user_agent")
        r = await self._governor.query_one(
            "INSERT INTO sessions (id, user_id, ip_address, user_agent, expired_at) "
            "VALUES (%s, %s, %s::inet, %s, NOW() + %s::interval) "
            f"RETURNING {SESSION_COLUMNS}",
            (uuid4(), user_id, ip_address, user_agent, interval),
        )
        return row_to_session(r)

    async def logout(self, user_id: int, session_id: UUID | str) -> int:
        """Mark session logged out. Returns affected row count."""
        require_int(user_id, "user_id")
        sid = require_uuid(session_id, "session_id")
        return await self._governor.execute(
            "UPDATE sessions SET logged_out_at = NOW() WHERE user_id = %s AND id = %s",
            (user_id, sid),
        )
