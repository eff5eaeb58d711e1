"""Error types raised by the workout core."""


class DropsetError(Exception):
    """Base class for errors raised by the core."""


class StorageFailure(DropsetError):
    """The key-value store could not read, write or (de)serialize a value.

    The session manager never publishes state for a failed write, so callers can
    retry the same command.
    """

    def __init__(self, operation: str, key: str, message: str) -> None:
        self.operation = operation
        self.key = key
        super().__init__(f"{operation} {key!r} failed: {message}")
