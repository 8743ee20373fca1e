# lever/errors.py
"""Exceptions raised by the lever package."""

from typing import Iterable


class LeverError(Exception):
    """Base class for all lever errors."""
    pass


class InputValidationError(LeverError, ValueError):
    """
    Raised when inputs are out of range or a variant is malformed.

    Carries every problem found, not just the first, so callers can show
    the whole list at once.
    """

    def __init__(self, errors: Iterable[str]):
        self.errors = tuple(errors)
        if len(self.errors) == 1:
            message = self.errors[0]
        else:
            message = "Invalid input: " + "; ".join(self.errors)
        super().__init__(message)
