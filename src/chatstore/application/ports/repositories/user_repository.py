"""User repository port."""

from typing import Protocol
from uuid import UUID

from chatstore.domain.entities import User


class UserRepository(Protocol):
    """Port for user persistence."""

    async def get_by_session_id(self, session_id: UUID | str) -> User | None: ...

    async def get_by_uname(self, uname: str) -> User | None: ...

    async def create(
        self, uname: str, password: str, email: str | None = None
    ) -> User: ...

    async def update(
        self, user_id: int, email: str | None = None, role: str | None = None
    ) -> User | None: ...

    async def update_role(self, user_id: int, role: str) -> User | None: ...

    async def list_with_message_counts(self) -> list[User]: ...
