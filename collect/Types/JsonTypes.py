"""Common type definitions for collections.

This module provides reusable type definitions for keys, stored items and
callbacks to replace explicit Any types throughout the package.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Union
from typing_extensions import TypeAlias

# Collection keys are scalars, None included
Key: TypeAlias = Union[str, int, float, None]
Items: TypeAlias = Dict[Key, Any]

# Callbacks receive (value, key, index); fewer parameters are allowed
ItemCallback: TypeAlias = Callable[..., Any]
FoldCallback: TypeAlias = Callable[..., Any]
Comparator: TypeAlias = Callable[[Any, Any], int]

# Logging context
LogContext = Dict[str, Union[str, int, float, bool, None]]
