"""PostgreSQL user repository implementation."""

from uuid import UUID

from chatstore.application.ports import PasswordHasher
from chatstore.domain.entities import User
from chatstore.domain.exceptions import PasswordHasherMissing
from chatstore.domain.guards import optional_str, require_int, require_str, require_uuid
from chatstore.infrastructure.persistence.postgres.governor import ConnectionGovernor

USER_COLUMNS = "id, uname, email, digest, role, created_at, last_online_at"


def row_to_user(r: tuple) -> User:
    return User(
        id=r[0],
        uname=r[1],
        email=r[2],
        digest=r[3],
        role=r[4],
        created_at=r[5],
        last_online_at=r[6],
    )


class PostgresUserRepository:
    """User repository implementation."""

    def __init__(
        self,
        governor: ConnectionGovernor,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self._governor = governor
        self._password_hasher = password_hasher

    async def get_by_session_id(self, session_id: UUID | str) -> User | None:
        """Get the owner of an active session and bump their last_online_at."""
        sid = require_uuid(session_id, "session_id")
        r = await self._governor.query_one(
            "UPDATE users SET last_online_at = NOW() "
            "WHERE id = (SELECT s.user_id FROM active_sessions s WHERE s.id = %s) "
            f"RETURNING {USER_COLUMNS}",
            (sid,),
        )
        return row_to_user(r) if r else None

    async def get_by_uname(self, uname: str) -> User | None:
        """Get user by uname, case-insensitive."""
        require_str(uname, "uname")
        r = await self._governor.query_one(
            f"SELECT {USER_COLUMNS} FROM users WHERE lower(uname) = lower(%s)",
            (uname,),
        )
        return row_to_user(r) if r else None

    async def create(
        self, uname: str, password: str, email: str | None = None
    ) -> User:
        """Hash password and insert user."""
        require_str(uname, "uname")
        require_str(password, "password")
        optional_str(email, "email")
        if self._password_hasher is None:
            raise PasswordHasherMissing("No password hasher configured")
        digest = await self._password_hasher.hash(password)
        r = await self._governor.query_one(
            "INSERT INTO users (uname, email, digest) VALUES (%s, %s, %s) "
            f"RETURNING {USER_COLUMNS}",
            (uname, email, digest),
        )
        return row_to_user(r)

    async def update(
        self, user_id: int, email: str | None = None, role: str | None = None
    ) -> User | None:
        """Set email (NULL clears it) and role when given."""
        require_int(user_id, "user_id")
        optional_str(email, "email")
        optional_str(role, "role")
        r = await self._governor.query_one(
            "UPDATE users SET email = %s, role = COALESCE(%s::user_role, role) "
            f"WHERE id = %s RETURNING {USER_COLUMNS}",
            (email, role, user_id),
        )
        return row_to_user(r) if r else None

    async def update_role(self, user_id: int, role: str) -> User | None:
        """Update user role."""
        require_int(user_id, "user_id")
        require_str(role, "role")
        r = await self._governor.query_one(
            f"UPDATE users SET role = %s::user_role WHERE id = %s RETURNING {USER_COLUMNS}",
            (role, user_id),
        )
        return row_to_user(r) if r else None

    async def list_with_message_counts(self) -> list[User]:
        """List users newest first, each with its visible message count."""
        rows = await self._governor.query_many(
            f"SELECT {USER_COLUMNS}, "
            "(SELECT COUNT(*) FROM messages m "
            "WHERE m.user_id = users.id AND m.is_hidden = false) AS messages_count "
            "FROM users ORDER BY id DESC"
        )
        users = []
        for r in rows:
            user = row_to_user(r)
            user.messages_count = r[7]
            users.append(user)
        return users
