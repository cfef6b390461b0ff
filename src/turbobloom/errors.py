"""Exceptions raised by turbobloom."""


class BloomError(Exception):
    pass


class InvalidParameter(BloomError, ValueError):
    """Expected item count or false positive probability out of range."""


class InvalidSize(BloomError, ValueError):
    pass


class OutOfBounds(BloomError, IndexError):
    pass


class UnhashableElement(BloomError, TypeError):
    """The element has no deterministic byte encoding."""
