class BookingValidationError(ValueError):
    """Raised when a new booking is missing required fields or has a bad value."""
    pass


class BookingNotFoundError(LookupError):
    """Raised when an action targets a key absent from the current snapshot."""
    pass


class InvalidTransitionError(RuntimeError):
    """Raised when an action is not allowed from the booking's current status."""

    def __init__(self, key: str, status: str, action: str, reason: str | None = None) -> None:
        self.key = key
        self.status = status
        self.action = action
        self.reason = reason or f"cannot {action} a booking in status '{status}'"
        super().__init__(self.reason)


class StoreUnavailableError(RuntimeError):
    """Raised when the booking store fails (network errors, HTTP errors, permissions)."""
    pass
