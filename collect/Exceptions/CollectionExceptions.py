from __future__ import annotations

from typing import Any, Optional


class CollectionException(Exception):
    """Base exception for collections"""
    pass


class NotFoundError(CollectionException, LookupError):
    """Exception raised when a position, key or value cannot be found"""

    def __init__(self, message: str, needle: Any = None) -> None:
        self.needle = needle
        super().__init__(message)

    @classmethod
    def position(cls, position: int) -> 'NotFoundError':
        return cls(f"No key at position {position}", position)

    @classmethod
    def key(cls, key: Any) -> 'NotFoundError':
        return cls(f"Unknown key: `{key!r}`", key)

    @classmethod
    def value(cls, value: Any) -> 'NotFoundError':
        return cls(f"Could not find item equal to `{value!r}`", value)


class InvalidInputError(CollectionException, TypeError):
    """Exception raised when an operation expects a traversable argument"""

    def __init__(self, method: str, received: Any) -> None:
        self.method = method
        self.received_type = type(received).__name__

        super().__init__(
            f"Invalid input type for `{method}`, must be a mapping or iterable, "
            f"`{self.received_type}` given."
        )


class CountMismatchError(CollectionException, ValueError):
    """Exception raised when two inputs must have the same number of items"""

    def __init__(self, method: str, expected: int, actual: int) -> None:
        self.method = method
        self.expected = expected
        self.actual = actual

        super().__init__(
            f"Invalid input for `{method}`, number of items does not match "
            f"(expected {expected}, got {actual})."
        )


class ConversionError(CollectionException, ValueError):
    """Exception raised when input cannot be normalized to key/value pairs"""

    def __init__(self, received: Any, reason: Optional[str] = None) -> None:
        self.received_type = type(received).__name__

        message = f"Could not convert `{self.received_type}` to an array"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class InvalidKeyError(CollectionException, TypeError):
    """Exception raised when a non-scalar value is used as a key"""

    def __init__(self, key: Any) -> None:
        self.key = key
        self.key_type = type(key).__name__

        super().__init__(
            f"Collection keys must be scalar (str, int, float or None), "
            f"`{self.key_type}` given."
        )
