"""Custom exceptions for the IBS tracker."""


class IbsTrackerError(Exception):
    """Base exception for all IBS tracker errors."""

    pass


class EntryValidationError(IbsTrackerError):
    """Raised when submitted entry fields are invalid."""

    pass


class InvalidTimestampError(EntryValidationError):
    """Raised when an edited date/time cannot be parsed."""

    pass


class StressAlreadyLoggedError(IbsTrackerError):
    """Raised when a second stress entry is created on the same day."""

    pass


class EntryNotFoundError(IbsTrackerError):
    """Raised when an entry id does not exist."""

    pass


class EntryTypeMismatchError(IbsTrackerError):
    """Raised when an update tries to change an entry's type."""

    pass


class EmptyExportError(IbsTrackerError):
    """Raised when there is nothing to export."""

    pass
