"""Exceptions raised by the EVI engine."""

from typing import List, Optional


class EVIError(Exception):
    """Base exception for the EVI engine."""


class InvalidSnapshotError(EVIError):
    """Raised when a composite snapshot is structurally incomplete."""
    def __init__(self, message: str, missing_drivers: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_drivers = missing_drivers or []


class FormulaIntegrityError(EVIError):
    """Raised when the formula constants break a weight or band invariant."""
    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []
