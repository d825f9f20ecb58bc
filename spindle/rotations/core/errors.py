"""
Exceptions raised when a rotation routine is handed geometrically invalid input.

Both concrete errors derive from :class:`RotationError`, which is itself a :class:`ValueError`, so callers that
already guard against bad values with ``except ValueError`` keep working.
"""

__all__ = ["RotationError", "ZeroNormError", "DegenerateVectorError"]


class RotationError(ValueError):
    """
    Base class for invalid geometric input to the rotation routines.
    """


class ZeroNormError(RotationError):
    """
    Raised when a quaternion with a numerically zero norm is normalized or inverted.

    The message identifies the operation that failed.
    """


class DegenerateVectorError(RotationError):
    """
    Raised when a zero length vector is given where a direction is required.
    """
