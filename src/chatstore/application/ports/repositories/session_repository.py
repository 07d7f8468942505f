"""Session repository port."""

from typing import Protocol
from uuid import UUID

from chatstore.domain.entities import Session


class SessionRepository(Protocol):
    """Port for login session persistence."""

    async def create(
        self,
        user_id: int,
        ip_address: str,
        interval: str,
        user_agent: str | None = None,
    ) -> Session: ...

    async def logout(self, user_id: int, session_id: UUID | str) -> int: ...
