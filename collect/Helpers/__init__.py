from __future__ import annotations

from .helpers import *

__all__ = [
    # Type helpers
    'is_scalar', 'is_numeric', 'to_numeric', 'to_string',

    # Array helpers
    'is_traversable', 'to_array',

    # Collection helpers
    'collect'
]
