"""Message repository port."""

from typing import Protocol

from chatstore.domain.entities import Message


class MessageRepository(Protocol):
    """Port for chat message persistence."""

    async def list_recent(self) -> list[Message]: ...

    async def list_recent_for_user(self, user_id: int) -> list[Message]: ...

    async def get_by_id(self, message_id: int) -> Message | None: ...

    async def create(
        self,
        markup: str,
        ip_address: str,
        user_id: int | None = None,
        user_agent: str | None = None,
    ) -> Message: ...

    async def hide(self, message_id: int) -> int: ...

    async def update(
        self,
        message_id: int,
        is_hidden: bool | None = None,
        markup: str | None = None,
    ) -> Message | None: ...

    async def list_all(self) -> list[Message]: ...
