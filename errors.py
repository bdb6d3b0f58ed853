class UintNError(Exception):
    """Base class for all errors raised by the UintNArray modules."""


class ConfigurationError(UintNError, ValueError):
    """Word bit width is not an integer between 1 and 32."""


class BoundsError(UintNError, ValueError):
    """Offset or length falls outside the bounds of the backing buffer."""


class TypeMismatchError(UintNError, TypeError):
    """Argument has the wrong kind (not iterable, not writable, ...)."""
