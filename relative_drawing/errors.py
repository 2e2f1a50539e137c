"""
Exceptions raised by relative_drawing.

All usage errors (self-adjacency, text without explicit dimensions,
unsupported decoration types) are UnsupportedOperationError. Arithmetic
errors from the numeric layer are the built-in ZeroDivisionError.
"""


class DrawingError(Exception):
    """Base class for relative_drawing errors."""


class UnsupportedOperationError(DrawingError):
    """A call that violates the usage contract of a shape, line or drawing."""
