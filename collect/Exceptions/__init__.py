from .CollectionExceptions import (
    CollectionException,
    NotFoundError,
    InvalidInputError,
    CountMismatchError,
    ConversionError,
    InvalidKeyError
)

__all__ = [
    "CollectionException",
    "NotFoundError",
    "InvalidInputError",
    "CountMismatchError",
    "ConversionError",
    "InvalidKeyError"
]
