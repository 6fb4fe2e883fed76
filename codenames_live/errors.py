"""Exceptions raised across room operations.

Nothing here is fatal to the process: every error is scoped to one room and
one client's action.
"""


class CodenamesError(Exception):
    """Base class for codenames-live errors."""


class RoomNotFoundError(CodenamesError):
    """The room code has no backing state in the store."""

    def __init__(self, room_code: str):
        super().__init__(f"Room {room_code} not found. Check the code and try again.")
        self.room_code = room_code


class RoomFinishedError(CodenamesError):
    """Joining a room whose game has already ended."""

    def __init__(self, room_code: str):
        super().__init__(f"The game in room {room_code} has already ended.")
        self.room_code = room_code


class PermissionDeniedError(CodenamesError):
    """An administrative action was requested by a non-admin."""


class StoreWriteError(CodenamesError):
    """The shared store failed to apply a write."""


class StaleWriteError(StoreWriteError):
    """A versioned write was based on an outdated room version."""

    def __init__(self, key: str, expected: int, actual: int):
        super().__init__(f"Stale write to {key}: based on version {expected}, store is at {actual}")
        self.key = key
        self.expected = expected
        self.actual = actual


class MissingDocumentError(StoreWriteError):
    """A partial write targeted a key with no document."""

    def __init__(self, key: str):
        super().__init__(f"No document under {key}")
        self.key = key


class TransientWriteError(CodenamesError):
    """A write did not complete; reported to the initiating client only."""

    def __init__(self, action: str, cause: Exception | None = None):
        super().__init__(f"Failed to {action}. Please try again.")
        self.action = action
        self.cause = cause
