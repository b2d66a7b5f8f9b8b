"""
Custom exception classes for the optionstore package.

Validator rejection is deliberately not an error in the store itself; these
exceptions cover the opt-in strict write path and configuration problems.
"""

from enum import Enum
from typing import Any, Iterable, List, Optional


class OptionStoreException(Exception):
    """Base exception class for all optionstore exceptions."""

    pass


class RejectedWriteError(OptionStoreException):
    """
    Raised when a strict write had one or more keys refused by the write validator.

    Approved keys of the same call are already stored when this is raised.

    Example:
        >>> raise RejectedWriteError(rejected=["_secret"], identifier="db")
    """

    def __init__(self, rejected: Iterable[Any], identifier: Optional[str] = None):
        self.rejected: List[Any] = list(rejected)
        self.identifier = identifier
        message = f"Write rejected for keys {self.rejected!r}"
        if identifier:
            message += f" (store={identifier!r})"
        super().__init__(message)


class StoreConfigError(OptionStoreException):
    """Raised when a store configuration cannot be parsed."""

    def __init__(self, reason: str, details: list = None):
        self.reason = reason
        self.details = details or []
        message = f"{reason}"
        if self.details:
            message += f" - {self.details}"
        super().__init__(message)


class RejectionPolicy(Enum):
    """Policy for reporting keys refused by the write validator."""

    IGNORE = "ignore"          # Drop silently (default store behaviour)
    WARN = "warn"              # Log a warning and continue
    FAIL = "fail"              # Raise RejectedWriteError
