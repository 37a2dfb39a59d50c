"""Ordered key/value collections with a chainable functional API."""

from __future__ import annotations

from .Support import Collection, config, env
from .Helpers import collect, is_traversable, to_array, to_numeric, is_numeric
from .Exceptions import (
    CollectionException,
    NotFoundError,
    InvalidInputError,
    CountMismatchError,
    ConversionError,
    InvalidKeyError
)

__version__ = "1.0.0"

__all__ = [
    "Collection",
    "collect",
    "config",
    "env",
    "is_traversable",
    "to_array",
    "to_numeric",
    "is_numeric",
    "CollectionException",
    "NotFoundError",
    "InvalidInputError",
    "CountMismatchError",
    "ConversionError",
    "InvalidKeyError"
]
