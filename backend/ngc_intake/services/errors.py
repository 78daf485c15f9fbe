"""Exceptions raised by the persistence services."""


class RecordNotFound(LookupError):
    """Raised when a consultation, contact or user id does not exist."""
