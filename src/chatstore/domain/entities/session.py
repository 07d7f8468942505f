"""Login session entity."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Session:
    """Session - one login of a user, valid until expired or logged out."""

    id: UUID
    user_id: int
    ip_address: str
    user_agent: str | None
    created_at: datetime
    expired_at: datetime
    logged_out_at: datetime | None = None
