"""Exceptions raised by the expense tracker."""


class ExpenseTrackerError(Exception):
    """Base class for errors reported to the user."""


class ValidationError(ExpenseTrackerError, ValueError):
    """Raised when user input does not meet validation requirements."""


class RecordNotFoundError(ExpenseTrackerError, LookupError):
    """Raised when an expense or budget record cannot be located."""


class StoreError(ExpenseTrackerError):
    """Raised when a JSON store cannot be read or written."""


class StoreParseError(StoreError):
    """Raised when a JSON store holds malformed data."""


class ConfigError(ExpenseTrackerError):
    """Raised when the configuration names something that cannot be used."""
