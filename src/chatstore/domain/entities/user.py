"""User entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """User - a registered chat member."""

    id: int
    uname: str
    email: str | None
    digest: str
    role: str
    created_at: datetime
    last_online_at: datetime | None = None
    messages_count: int | None = None
