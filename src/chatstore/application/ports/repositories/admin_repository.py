"""Admin panel repository port."""

from typing import Protocol

from chatstore.domain.entities import Stats


class AdminRepository(Protocol):
    """Port for admin-only aggregate queries."""

    async def get_stats(self) -> Stats: ...
