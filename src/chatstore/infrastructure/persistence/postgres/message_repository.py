"""PostgreSQL message repository implementation."""

from chatstore.domain.entities import Message
from chatstore.domain.guards import optional_bool, optional_str, require_int, require_str
from chatstore.infrastructure.persistence.postgres.governor import ConnectionGovernor
from chatstore.infrastructure.persistence.postgres.user_repository import row_to_user

MESSAGE_COLUMNS = (
    "m.id, m.user_id, m.markup, host(m.ip_address), m.user_agent, m.is_hidden, m.created_at"
)
AUTHOR_COLUMNS = "u.id, u.uname, u.email, u.digest, u.role, u.created_at, u.last_online_at"
_WITH_AUTHOR = (
    f"SELECT {MESSAGE_COLUMNS}, {AUTHOR_COLUMNS} "
    "FROM messages m LEFT JOIN users u ON m.user_id = u.id"
)


def row_to_message(r: tuple) -> Message:
    """Map message row; columns past the seventh, if any, are the author."""
    author = None
    if len(r) > 7 and r[7] is not None:
        author = row_to_user(r[7:14])
    return Message(
        id=r[0],
        user_id=r[1],
        markup=r[2],
        ip_address=r[3],
        user_agent=r[4],
        is_hidden=r[5],
        created_at=r[6],
        user=author,
    )


class PostgresMessageRepository:
    """Message repository implementation."""

    def __init__(self, governor: ConnectionGovernor, recent_limit: int = 25) -> None:
        self._governor = governor
        self._recent_limit = recent_limit

    async def list_recent(self) -> list[Message]:
        """Latest visible messages with author, newest first."""
        rows = await self._governor.query_many(
            f"{_WITH_AUTHOR} WHERE m.is_hidden = false ORDER BY m.id DESC LIMIT %s",
            (self._recent_limit,),
        )
        return [row_to_message(r) for r in rows]

    async def list_recent_for_user(self, user_id: int) -> list[Message]:
        """Latest visible messages by one user, newest first."""
        require_int(user_id, "user_id")
        rows = await self._governor.query_many(
            f"{_WITH_AUTHOR} WHERE m.is_hidden = false AND u.id = %s "
            "ORDER BY m.id DESC LIMIT %s",
            (user_id, self._recent_limit),
        )
        return [row_to_message(r) for r in rows]

    async def get_by_id(self, message_id: int) -> Message | None:
        require_int(message_id, "message_id")
        r = await self._governor.query_one(
            f"SELECT {MESSAGE_COLUMNS} FROM messages m WHERE m.id = %s",
            (message_id,),
        )
        return row_to_message(r) if r else None

    async def create(
        self,
        markup: str,
        ip_address: str,
        user_id: int | None = None,
        user_agent: str | None = None,
    ) -> Message:
        """Insert message. user_id None posts anonymously."""
        require_str(markup, "markup")
        require_str(ip_address, "ip_address")
        if user_id is not None:
            require_int(user_id, "user_id")
        optional_str(user_agent, "user_agent")
        r = await self._governor.query_one(
            "INSERT INTO messages AS m (user_id, markup, ip_address, user_agent) "
            "VALUES (%s, %s, %s::inet, %s) "
            f"RETURNING {MESSAGE_COLUMNS}",
            (user_id, markup, ip_address, user_agent),
        )
        return row_to_message(r)

    async def hide(self, message_id: int) -> int:
        """Hide message. Returns affected row count."""
        require_int(message_id, "message_id")
        return await self._governor.execute(
            "UPDATE messages SET is_hidden = true WHERE id = %s",
            (message_id,),
        )

    async def update(
        self,
        message_id: int,
        is_hidden: bool | None = None,
        markup: str | None = None,
    ) -> Message | None:
        """Update given fields, leave the others as they are."""
        require_int(message_id, "message_id")
        optional_bool(is_hidden, "is_hidden")
        optional_str(markup, "markup")
        r = await self._governor.query_one(
            "UPDATE messages AS m SET "
            "is_hidden = COALESCE(%s, m.is_hidden), "
            "markup = COALESCE(%s, m.markup) "
            f"WHERE m.id = %s RETURNING {MESSAGE_COLUMNS}",
            (is_hidden, markup, message_id),
        )
        return row_to_message(r) if r else None

    async def list_all(self) -> list[Message]:
        """All messages, hidden included, with author, newest first."""
        rows = await self._governor.query_many(f"{_WITH_AUTHOR} ORDER BY m.id DESC")
        return [row_to_message(r) for r in rows]
