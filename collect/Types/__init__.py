from __future__ import annotations

from .JsonTypes import (
    Key,
    Items,
    ItemCallback,
    FoldCallback,
    Comparator,
    LogContext
)

__all__ = [
    'Key',
    'Items',
    'ItemCallback',
    'FoldCallback',
    'Comparator',
    'LogContext'
]
