"""Chat message entity."""

from dataclasses import dataclass
from datetime import datetime

from chatstore.domain.entities.user import User


@dataclass
class Message:
    """Message - chat line, optionally anonymous (no user_id)."""

    id: int
    user_id: int | None
    markup: str
    ip_address: str
    user_agent: str | None
    is_hidden: bool
    created_at: datetime
    user: User | None = None
