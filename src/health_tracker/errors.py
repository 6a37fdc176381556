"""Error types raised by the tracker core."""


class TrackerError(Exception):
    """Base class for tracker errors with a client-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """Malformed or missing input."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(TrackerError):
    """Operation requires a row that does not exist."""


class UnauthorizedError(TrackerError):
    """Missing or rejected user identity."""


class ConflictError(TrackerError):
    """Store rejected a write because of a uniqueness constraint."""
