"""Admin panel statistics."""

from dataclasses import dataclass


@dataclass
class Stats:
    """Stats - hidden messages are treated as deleted and not counted."""

    users_count: int
    messages_count: int
