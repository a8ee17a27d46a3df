"""Exceptions raised by the bias analysis engine.

Each failure mode has its own type so the API layer can map it to a status code.
"""


class BiasEngineError(Exception):
    """Base exception for all analysis engine errors."""
    pass


class MalformedInput(BiasEngineError):
    """Raised when a dataset has rows but no usable header (no columns)."""
    pass


class UnsupportedInputKind(BiasEngineError):
    """
    Raised when non-tabular input reaches the engine.

    Example:
        >>> analyze(b"\\x89PNG...")
        Traceback (most recent call last):
        ...
        UnsupportedInputKind: Expected tabular rows, got bytes
    """
    pass


class ConfigurationError(BiasEngineError):
    """Raised when a keyword table override is invalid."""
    pass
