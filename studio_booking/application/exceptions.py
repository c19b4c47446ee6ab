class AuthenticationFailure(RuntimeError):
    """Raised when an inbound payment event has a missing or invalid signature."""
    pass


class StorageFailure(RuntimeError):
    """Raised when a store cannot read or persist its data. Nothing is partially written."""
    pass


class SlotOutOfRangeError(ValueError):
    """Raised when a day/hour pair falls outside the week or the operating window."""
    pass


class TemplateNotFoundError(KeyError):
    pass


class BookingNotFoundError(KeyError):
    pass


class ResourceMismatchError(RuntimeError):
    """Raised when a conditional update scoped to (id, artist) matched no row."""
    pass


class SlotUnavailableError(RuntimeError):
    """Raised when a requested interval is blocked or already taken."""
    pass
