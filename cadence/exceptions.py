"""
TopShot Transaction Generator - Cadence Exceptions

This module defines the exceptions raised while rendering Cadence literals
and composing transaction scripts.
"""

from typing import Optional


class ComposeError(Exception):
    """Base exception for script generation errors."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        if field:
            message = f"{field}: {message}"
        super().__init__(message)


class UnsupportedOperationError(ComposeError):
    """Exception raised when no template matches the requested operation."""

    def __init__(self, operation: object, message: str = None):
        self.operation = operation
        if message is None:
            message = f"No transaction template for operation {type(operation).__name__}"
        super().__init__(message)


class SerializationError(ComposeError):
    """Exception raised when a value cannot be rendered as a Cadence literal."""
    pass


class EmptySequenceError(SerializationError):
    """Exception raised when a sequence that must be non-empty is empty."""

    def __init__(self, field: Optional[str] = None, message: str = None):
        if message is None:
            message = "Sequence must contain at least one element"
        super().__init__(message, field)


class ValueOutOfRangeError(SerializationError):
    """Exception raised when an integer does not fit its declared width."""

    def __init__(self, width: int, value: int, field: Optional[str] = None):
        self.width = width
        self.value = value
        message = f"Value {value} out of range for UInt{width} (0..{(1 << width) - 1})"
        super().__init__(message, field)


class InvalidAddressError(SerializationError, ValueError):
    """Exception raised for malformed Flow addresses."""
    pass
