"""Exceptions raised by the aftershock forecast engine."""

from typing import List, Optional, Tuple


class AftershockForecastError(Exception):
    """Base class for all aftershock forecast errors."""


class InvalidInputError(AftershockForecastError, ValueError):
    """
    Raised when a forecast cannot be computed from the given inputs.

    Fatal to the single call; the caller can correct the input and retry.

    Attributes:
        errors: (field, message) pairs describing every problem found
    """

    def __init__(self, message: str, errors: Optional[List[Tuple[str, str]]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else []

    @classmethod
    def from_errors(cls, errors: List[Tuple[str, str]]) -> "InvalidInputError":
        """Build a single exception summarising several validation errors."""
        message = "; ".join(msg for _, msg in errors)
        return cls(message, errors)


class QuakeNotFoundError(AftershockForecastError, KeyError):
    """Raised when a data source has no record of the requested event."""

    def __str__(self) -> str:
        # KeyError wraps its message in quotes
        return str(self.args[0]) if self.args else ""
