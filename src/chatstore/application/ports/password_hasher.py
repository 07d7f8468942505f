"""Password hasher port."""

from typing import Protocol


class PasswordHasher(Protocol):
    """Turns a plaintext password into a stored digest."""

    async def hash(self, password: str) -> str: ...
