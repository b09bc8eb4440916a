"""Exceptions raised while loading shop definition files."""
from __future__ import annotations


class DataError(Exception):
    """Base exception for definition data problems."""


class DataLoadError(DataError):
    """Raised when a definition file is missing, unreadable or not JSON.

    ``filename`` names the definition file (``products.json`` and so on) so
    callers can tell the player which file to fix.
    """

    def __init__(self, message: str, *, filename: str | None = None) -> None:
        super().__init__(message)
        self.filename = filename


class DataValidationError(DataError):
    """Raised when a definition entry has the wrong shape or an out-of-range value."""


class DataReferenceError(DataError):
    """Raised when a definition points at a product template or color that does not exist."""
