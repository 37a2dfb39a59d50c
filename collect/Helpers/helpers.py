from __future__ import annotations

from typing import Any, Dict, Optional, Union, TYPE_CHECKING
from collections.abc import Iterable, Mapping
import json
import re

from collect.Exceptions.CollectionExceptions import ConversionError
from collect.Support.Config import config
from collect.Utils.Logger import get_logger

if TYPE_CHECKING:
    from collect.Support.Collection import Collection

logger = get_logger(__name__)

_NUMERIC_PATTERN = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$')


# Type Helpers
def is_scalar(value: Any) -> bool:
    """Check if value is a str, int, float or bool."""
    return isinstance(value, (str, int, float, bool))


def is_numeric(value: Any) -> bool:
    """Check if value is a number or a numeric string."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        return _NUMERIC_PATTERN.match(value) is not None
    return False


def to_numeric(value: Any) -> Union[int, float]:
    """Get the numeric value of any variable.

    Numbers are returned unchanged, numeric strings are converted to int or
    float (whichever they spell) and everything else becomes 0.
    """
    if not is_numeric(value):
        return 0
    if isinstance(value, (int, float)):
        return value

    text = value.strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def to_string(value: Any) -> str:
    """Get the string form of a scalar value."""
    if value is None or value is False:
        return ''
    if value is True:
        return '1'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# Array Helpers
def is_traversable(value: Any) -> bool:
    """Check if value can be iterated as items (strings excluded)."""
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, Iterable) or callable(getattr(value, 'to_array', None))


def to_array(items: Any, force: bool = False) -> Dict[Any, Any]:
    """Convert items to an ordered dict.

    Objects exposing ``to_array()`` (collections) are asked for their items,
    mappings are copied, other iterables are numbered from zero and JSON
    object/array strings are decoded. When nothing applies, ``force`` wraps
    the value instead of raising ConversionError.
    """
    to_array_method = getattr(items, 'to_array', None)
    if callable(to_array_method):
        return dict(to_array_method())
    if isinstance(items, Mapping):
        return dict(items.items())
    if isinstance(items, str):
        decoded = _decode_json(items)
        if decoded is not None:
            return decoded
    elif isinstance(items, Iterable) and not isinstance(items, (bytes, bytearray)):
        return dict(enumerate(items))

    if force:
        return _force_array(items)

    raise ConversionError(items)


def _decode_json(text: str) -> Optional[Dict[Any, Any]]:
    """Decode a JSON object or array string, if coercion is enabled."""
    if not config.get('coerce_json_strings', True):
        return None

    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        return None

    if isinstance(decoded, dict):
        logger.debug("Coerced JSON object string to array", {'keys': len(decoded)})
        return decoded
    if isinstance(decoded, list):
        logger.debug("Coerced JSON array string to array", {'items': len(decoded)})
        return dict(enumerate(decoded))
    return None


def _force_array(items: Any) -> Dict[Any, Any]:
    """Wrap a value that is not convertible."""
    if items is None:
        return {}

    logger.debug("Forcing value to array", {'type': type(items).__name__})
    if not is_scalar(items) and hasattr(items, '__dict__'):
        return dict(vars(items))
    return {0: items}


# Collection Helpers
def collect(items: Any = None) -> 'Collection':
    """Create collection instance."""
    from collect.Support.Collection import Collection
    return Collection.factory(items)
