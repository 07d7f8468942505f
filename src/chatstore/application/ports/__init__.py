"""Application ports - interfaces for external adapters."""

from chatstore.application.ports.connection_pool import ConnectionPool, Release
from chatstore.application.ports.password_hasher import PasswordHasher

__all__ = [
    "ConnectionPool",
    "PasswordHasher",
    "Release",
]
