"""Domain entities."""

from chatstore.domain.entities.message import Message
from chatstore.domain.entities.session import Session
from chatstore.domain.entities.stats import Stats
from chatstore.domain.entities.user import User

__all__ = [
    "Message",
    "Session",
    "Stats",
    "User",
]
