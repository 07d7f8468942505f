"""Domain exceptions."""


class ChatStoreError(Exception):
    """Base exception for chatstore."""

    pass


class ValidationError(ChatStoreError):
    """Argument has the wrong type or shape."""

    pass


class TooManyRows(ChatStoreError):
    """Single-row query matched more than one row."""

    def __init__(self, count: int) -> None:
        super().__init__(f"Expected at most one row, got {count}")
        self.count = count


class PasswordHasherMissing(ChatStoreError):
    """User insert attempted without a password hasher configured."""

    pass


class PoolUnsafeError(ChatStoreError):
    """Wraps an error that left the client connection in an undefined state.

    The governor checks ``discard_connection`` and, when set, tells the pool to
    drop the physical connection instead of reusing it. The wrapped ``error`` is
    what the caller finally sees.
    """

    def __init__(self, error: BaseException, discard_connection: bool = True) -> None:
        super().__init__(str(error))
        self.error = error
        self.discard_connection = discard_connection
