"""Repository ports."""

from chatstore.application.ports.repositories.admin_repository import AdminRepository
from chatstore.application.ports.repositories.message_repository import (
    MessageRepository,
)
from chatstore.application.ports.repositories.session_repository import (
    SessionRepository,
)
from chatstore.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "AdminRepository",
    "MessageRepository",
    "SessionRepository",
    "UserRepository",
]
