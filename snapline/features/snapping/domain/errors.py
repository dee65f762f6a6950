"""
Snapping errors.

Only configuration/arithmetic faults are exceptions. "No pointer position"
and "no snap candidate" are ordinary outcomes and are returned as values.
"""


class SnapError(Exception):
    """Base exception for snapping operations."""
    pass


class InvalidTimeBase(SnapError, ValueError):
    """Raised when a rounding unit would be derived from a non-positive rate."""

    def __init__(self, name: str, value, context: str = ""):
        self.name = name
        self.value = value
        self.context = context
        message = f"{name} must be positive, got {value}"
        if context:
            message += f" ({context})"
        super().__init__(message)
