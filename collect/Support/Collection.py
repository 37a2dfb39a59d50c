from __future__ import annotations

from typing import Any, Dict, List, Optional, Union, Callable, Iterator, Tuple
import inspect
import json
import math
import random
from collections import Counter
from functools import cmp_to_key
from itertools import islice, zip_longest

from collect.Exceptions.CollectionExceptions import (
    NotFoundError,
    InvalidInputError,
    CountMismatchError,
    InvalidKeyError
)
from collect.Helpers.helpers import (
    is_numeric,
    is_scalar,
    is_traversable,
    to_array,
    to_numeric,
    to_string
)
from collect.Support.Config import config
from collect.Types.JsonTypes import Comparator, FoldCallback, ItemCallback, Items, Key
from collect.Utils.Logger import get_logger

logger = get_logger(__name__)

# Marks an argument that was not passed, since None is a valid key
_MISSING: Any = object()


def _arity(callback: Callable[..., Any]) -> Optional[int]:
    """Get the number of positional arguments a callback accepts (None if unlimited)."""
    if inspect.isclass(callback):
        # types such as str or int are called with the value only
        return 1

    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        # builtins without introspection take a single value
        return 1

    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind == parameter.VAR_POSITIONAL:
            return None
        if parameter.kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return count


def _bind(callback: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a callback so it only receives as many arguments as it declares."""
    arity = _arity(callback)
    if arity is None:
        return callback

    def invoke(*args: Any) -> Any:
        return callback(*args[:arity])

    return invoke


def _strict_equals(left: Any, right: Any) -> bool:
    """Compare two values by type and value, recursing into containers."""
    if type(left) is not type(right):
        return False

    if isinstance(left, Collection):
        return _strict_equals(left.to_array(), right.to_array())
    if isinstance(left, dict):
        return len(left) == len(right) and all(
            _strict_equals(lkey, rkey) and _strict_equals(lvalue, rvalue)
            for (lkey, lvalue), (rkey, rvalue) in zip(left.items(), right.items())
        )
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(
            _strict_equals(lvalue, rvalue) for lvalue, rvalue in zip(left, right)
        )

    return bool(left == right)


def _json_default(value: Any) -> Any:
    """Serialize nested collections and fall back to str."""
    if isinstance(value, Collection):
        return value.json_serialize()
    return str(value)


class Collection:
    """Ordered key/value collection.

    Wraps an insertion-ordered dict and adds functional and utility
    operations. Keys are always preserved; use ``values()`` to renumber.

    Callbacks are called as ``callback(value, key, index)`` where ``index``
    counts invocations from zero. A callback may declare fewer parameters,
    in which case only the leading arguments are passed.
    """

    def __init__(self, items: Any = None) -> None:
        self._items: Items = {} if items is None else self._validated(to_array(items))
        self._position = 0

    @classmethod
    def factory(cls, items: Any = None) -> 'Collection':
        """Create a collection from anything that can be converted to an array."""
        if items is None:
            return cls()
        return cls._make(cls._validated(to_array(items, force=config.get('force_conversion', True))))

    @classmethod
    def _make(cls, items: Items) -> 'Collection':
        """Wrap an already normalized dict without copying it."""
        collection = cls()
        collection._items = items
        return collection

    # Key helpers
    @staticmethod
    def _is_key(key: Any) -> bool:
        return key is None or is_scalar(key)

    @classmethod
    def _check_key(cls, key: Any) -> Key:
        if not cls._is_key(key):
            raise InvalidKeyError(key)
        return key

    @classmethod
    def _validated(cls, items: Items) -> Items:
        for key in items:
            cls._check_key(key)
        return items

    def _next_key(self) -> int:
        """Get the key add() would use: one past the highest numeric key.

        Float keys count too, since 1.0 and 1 are the same dict key.
        """
        numeric_keys = [
            math.floor(key) for key in self._items
            if isinstance(key, (int, float)) and math.isfinite(key)
        ]
        if not numeric_keys:
            return 0
        return max(max(numeric_keys) + 1, 0)

    def _is_list(self) -> bool:
        """Check if keys are exactly 0..n-1 in order."""
        return all(type(key) is int and key == index for index, key in enumerate(self._items))

    def _reindexed(self, values: List[Any]) -> Items:
        return dict(enumerate(values))

    def _require_traversable(self, method: str, items: Any) -> Items:
        if not is_traversable(items):
            logger.debug("Rejected non-traversable input", {'method': method, 'type': type(items).__name__})
            raise InvalidInputError(method, items)
        return to_array(items)

    # Core methods
    def to_array(self) -> Items:
        """Get collection items as a dict."""
        return dict(self._items)

    def to_list(self) -> List[Any]:
        """Get collection values as a list."""
        return list(self._items.values())

    def count(self) -> int:
        """Get the number of items."""
        return len(self._items)

    def is_empty(self) -> bool:
        """Check if the collection is empty."""
        return len(self._items) == 0

    def items(self) -> Iterator[Tuple[Key, Any]]:
        """Iterate over (key, value) pairs."""
        return iter(self._items.items())

    # Lookup
    def has(self, key: Any) -> bool:
        """Check if the collection has a key, even if its value is None."""
        return self._is_key(key) and key in self._items

    def get(self, key: Any, default: Any = None) -> Any:
        """Get an item by key."""
        if self.has(key):
            return self._items[key]
        return default

    def _find_key_at(self, position: int) -> Any:
        """Get the key at a 1-based (or negative) position, or _MISSING."""
        if not isinstance(position, int):
            return _MISSING

        count = len(self._items)
        if 0 < position <= count:
            index = position - 1
        elif 0 < -position <= count:
            index = count + position
        else:
            return _MISSING
        return next(islice(self._items, index, None))

    def has_value_at(self, position: int) -> bool:
        """Check if there is an item at the given position.

        Positions start at 1; negative positions count back from the end.
        """
        return self._find_key_at(position) is not _MISSING

    def get_key_at(self, position: int) -> Key:
        """Get the key at the given position."""
        key = self._find_key_at(position)
        if key is _MISSING:
            raise NotFoundError.position(position)
        return key

    def get_value_at(self, position: int) -> Any:
        """Get the value at the given position."""
        return self._items[self.get_key_at(position)]

    def _matcher(self, matcher: Any) -> Callable[..., Any]:
        """Turn a value or predicate into a (value, key, index) predicate."""
        if callable(matcher):
            return _bind(matcher)
        return lambda value, key, index: _strict_equals(matcher, value)

    def key_of(self, matcher: Any) -> Key:
        """Get the key of the first item equal to a value or matching a predicate."""
        match = self._matcher(matcher)
        for index, (key, value) in enumerate(list(self._items.items())):
            if match(value, key, index):
                return key
        raise NotFoundError.value(matcher)

    def index_of(self, matcher: Any) -> int:
        """Get the 0-based index of the first item equal to a value or matching a predicate."""
        match = self._matcher(matcher)
        for index, (key, value) in enumerate(list(self._items.items())):
            if match(value, key, index):
                return index
        raise NotFoundError.value(matcher)

    def contains(self, matcher: Any, key: Any = _MISSING) -> bool:
        """Check if the collection contains a value (or an item matching a predicate).

        When a key is given, the first match must also be stored under that key.
        """
        match = self._matcher(matcher)
        for index, (k, value) in enumerate(list(self._items.items())):
            if match(value, k, index):
                return key is _MISSING or _strict_equals(key, k)
        return False

    def first(self, callback: Optional[ItemCallback] = None) -> Any:
        """Get the first item, or the first one passing a callback."""
        call = _bind(callback) if callback is not None else None
        for index, (key, value) in enumerate(list(self._items.items())):
            if call is None or call(value, key, index):
                return value
        return None

    def last(self, callback: Optional[ItemCallback] = None) -> Any:
        """Get the last item, or the last one passing a callback."""
        call = _bind(callback) if callback is not None else None
        for index, (key, value) in enumerate(reversed(list(self._items.items()))):
            if call is None or call(value, key, index):
                return value
        return None

    def random(self) -> Any:
        """Get a random item."""
        if self.is_empty():
            raise NotFoundError("Cannot pick a random item from an empty collection")
        return self.get_value_at(random.randint(1, len(self._items)))

    def join(self, delim: str = '') -> str:
        """Join items into a string."""
        return delim.join(to_string(value) for value in self._items.values())

    # Adding/Removing items
    def add(self, value: Any) -> 'Collection':
        """Add an item under the next integer key."""
        self._items[self._next_key()] = value
        return self

    def set(self, key: Any, value: Any, overwrite: bool = True) -> 'Collection':
        """Assign a value to a key, optionally leaving existing keys alone."""
        self._check_key(key)
        if overwrite or key not in self._items:
            self._items[key] = value
        return self

    def delete(self, key: Any) -> 'Collection':
        """Remove an item by key."""
        if self.has(key):
            del self._items[key]
        return self

    def clear(self) -> 'Collection':
        """Remove all items."""
        self._items.clear()
        return self

    def pull(self, key: Any) -> Any:
        """Remove an item by key and return it."""
        if self.has(key):
            return self._items.pop(key)
        return None

    def pop(self) -> Any:
        """Remove and return the last item."""
        if not self._items:
            return None
        return self._items.pop(next(reversed(self._items)))

    def shift(self) -> Any:
        """Remove and return the first item, renumbering list collections."""
        if not self._items:
            return None

        was_list = self._is_list()
        value = self._items.pop(next(iter(self._items)))
        if was_list:
            self._items = self._reindexed(list(self._items.values()))
        return value

    def push(self, value: Any) -> 'Collection':
        """Add an item to the end of the collection."""
        return self.add(value)

    def unshift(self, value: Any) -> 'Collection':
        """Add an item to the beginning of the collection.

        List collections are renumbered; otherwise the new item gets the
        next integer key and existing keys stay untouched.
        """
        if self._is_list():
            self._items = self._reindexed([value, *self._items.values()])
        else:
            self._items = {self._next_key(): value, **self._items}
        return self

    def append(self, items: Any) -> 'Collection':
        """Add every value from items, without regard to keys."""
        values = self._require_traversable('append', items).values()

        next_key = self._next_key()
        for value in values:
            self._items[next_key] = value
            next_key += 1
        return self

    # Structure
    def values(self) -> 'Collection':
        """Get a new collection of the values, numbered from zero."""
        return self._make(self._reindexed(list(self._items.values())))

    def keys(self) -> 'Collection':
        """Get a new collection of the keys, numbered from zero."""
        return self._make(self._reindexed(list(self._items.keys())))

    def pairs(self) -> 'Collection':
        """Get a new collection of (key, value) tuples."""
        return self._make(self._reindexed(list(self._items.items())))

    def reverse(self) -> 'Collection':
        """Get a new collection in reverse order, renumbering list collections."""
        entries = list(self._items.items())[::-1]
        if self._is_list():
            return self._make(self._reindexed([value for _, value in entries]))
        return self._make(dict(entries))

    def flip(self) -> 'Collection':
        """Get a new collection with keys and values swapped."""
        strict = config.get('strict_keys', True)

        flipped: Items = {}
        for key, value in self._items.items():
            if not self._is_key(value):
                if strict:
                    raise InvalidKeyError(value)
                logger.debug("Skipped non-scalar value while flipping", {'key': to_string(key), 'type': type(value).__name__})
                continue
            flipped[value] = key
        return self._make(flipped)

    def shuffle(self) -> 'Collection':
        """Shuffle the items in place, keeping each key with its value."""
        keys = list(self._items)
        random.shuffle(keys)
        self._items = {key: self._items[key] for key in keys}
        return self

    def distinct(self) -> 'Collection':
        """Get a new collection without duplicate values (first one wins)."""
        distinct: Items = {}
        for key, value in self._items.items():
            if not any(_strict_equals(value, seen) for seen in distinct.values()):
                distinct[key] = value
        return self._make(distinct)

    def deduplicate(self) -> 'Collection':
        """Remove duplicate values in place."""
        self._items = self.distinct()._items
        return self

    def chunk(self, size: int) -> 'Collection':
        """Break the collection into dicts of the given size, keeping keys."""
        if size < 1:
            raise ValueError("Chunk size must be at least 1")

        entries = list(self._items.items())
        chunks = [dict(entries[i:i + size]) for i in range(0, len(entries), size)]
        return self._make(self._reindexed(chunks))

    def split(self, count: int = 1) -> 'Collection':
        """Split the collection into the given number of chunks."""
        if count < 1:
            raise ValueError("Split count must be at least 1")
        if not self._items:
            return self._make({})
        return self.chunk(math.ceil(len(self._items) / count))

    def slice(self, offset: int, length: Optional[int] = None) -> 'Collection':
        """Get a slice of the collection.

        A negative offset starts that far from the end. Without a length the
        slice runs to the end; a negative length stops that many items
        before the end.
        """
        entries = list(self._items.items())
        total = len(entries)

        start = offset if offset >= 0 else max(total + offset, 0)
        if length is None:
            stop = total
        elif length < 0:
            stop = max(total + length, 0)
        else:
            stop = start + length

        return self._make(dict(entries[start:stop]))

    def pad(self, size: int, value: Any = None) -> 'Collection':
        """Get a new collection padded to abs(size) items.

        A positive size pads at the end, a negative size at the beginning.
        """
        missing = abs(size) - len(self._items)
        if missing <= 0:
            return self._make(dict(self._items))

        if self._is_list():
            values = list(self._items.values())
            padding = [value] * missing
            return self._make(self._reindexed(values + padding if size > 0 else padding + values))

        next_key = self._next_key()
        padding_entries = [(next_key + i, value) for i in range(missing)]
        if size > 0:
            return self._make(dict(list(self._items.items()) + padding_entries))
        return self._make(dict(padding_entries + list(self._items.items())))

    def zip(self, *others: Any) -> 'Collection':
        """Get a new collection of tuples pairing items by position."""
        columns = [list(self._items.values())]
        columns.extend(list(to_array(other).values()) for other in others)
        return self._make(self._reindexed(list(zip_longest(*columns))))

    def nth(self, n: int) -> 'Collection':
        """Get every n-th item."""
        if n < 1:
            raise ValueError("n must be at least 1")
        return self.filter(lambda value, key, index: (index + 1) % n == 0)

    # Combining
    def merge(self, items: Any) -> 'Collection':
        """Get a new collection with items set over this one's (incoming wins)."""
        merged = dict(self._items)
        for key, value in self._require_traversable('merge', items).items():
            merged[self._check_key(key)] = value
        return self._make(merged)

    def union(self, items: Any) -> 'Collection':
        """Get a new collection with only the missing keys added from items."""
        united = dict(self._items)
        for key, value in self._require_traversable('union', items).items():
            united.setdefault(self._check_key(key), value)
        return self._make(united)

    def combine(self, items: Any) -> 'Collection':
        """Get a new collection using these values as keys for the values of items."""
        values = list(self._require_traversable('combine', items).values())
        if len(values) != len(self._items):
            raise CountMismatchError('combine', len(self._items), len(values))

        keys = [self._check_key(key) for key in self._items.values()]
        return self._make(dict(zip(keys, values)))

    def rekey(self, keys: Any) -> 'Collection':
        """Get a new collection of these values stored under new keys."""
        new_keys = list(self._require_traversable('rekey', keys).values())
        if len(new_keys) != len(self._items):
            raise CountMismatchError('rekey', len(self._items), len(new_keys))

        for key in new_keys:
            self._check_key(key)
        return self._make(dict(zip(new_keys, self._items.values())))

    def diff(self, items: Any) -> 'Collection':
        """Get the items whose value is not present in items."""
        others = list(to_array(items).values())
        return self._make({
            key: value for key, value in self._items.items()
            if not any(_strict_equals(value, other) for other in others)
        })

    def intersect(self, items: Any) -> 'Collection':
        """Get the items whose value is present in items."""
        others = list(to_array(items).values())
        return self._make({
            key: value for key, value in self._items.items()
            if any(_strict_equals(value, other) for other in others)
        })

    def kdiff(self, items: Any) -> 'Collection':
        """Get the items whose key is not present in items."""
        others = to_array(items)
        return self._make({key: value for key, value in self._items.items() if key not in others})

    def kintersect(self, items: Any) -> 'Collection':
        """Get the items whose key is present in items."""
        others = to_array(items)
        return self._make({key: value for key, value in self._items.items() if key in others})

    # Transforming
    def map(self, callback: ItemCallback) -> 'Collection':
        """Get a new collection of callback results under the same keys."""
        call = _bind(callback)
        return self._make({
            key: call(value, key, index)
            for index, (key, value) in enumerate(list(self._items.items()))
        })

    def filter(self, callback: Optional[ItemCallback] = None) -> 'Collection':
        """Get a new collection of the items passing a callback (or truthy items)."""
        if callback is None:
            return self._make({key: value for key, value in self._items.items() if value})

        call = _bind(callback)
        return self._make({
            key: value
            for index, (key, value) in enumerate(list(self._items.items()))
            if call(value, key, index)
        })

    def fold(self, callback: FoldCallback, initial: Any = None) -> Any:
        """Reduce the collection to a single value.

        The callback is called as ``callback(accumulator, value, key, index)``.
        """
        call = _bind(callback)
        folded = initial
        for index, (key, value) in enumerate(list(self._items.items())):
            folded = call(folded, value, key, index)
        return folded

    def foldr(self, callback: FoldCallback, initial: Any = None) -> Any:
        """Reduce the collection to a single value, starting from the end."""
        return self.reverse().fold(callback, initial)

    def recollect(self, callback: FoldCallback) -> 'Collection':
        """Fold the collection into a new, initially empty, collection."""
        return self.fold(callback, self._make({}))

    def each(self, callback: ItemCallback) -> 'Collection':
        """Execute callback for each item, stopping when it returns False."""
        call = _bind(callback)
        for index, (key, value) in enumerate(list(self._items.items())):
            if call(value, key, index) is False:
                break
        return self

    def assert_(self, callback: ItemCallback, expected: Any = True) -> bool:
        """Check that callback returns exactly the expected value for every item."""
        call = _bind(callback)
        for index, (key, value) in enumerate(list(self._items.items())):
            if not _strict_equals(call(value, key, index), expected):
                return False
        return True

    def pipe(self, callback: Callable[['Collection'], Any]) -> Any:
        """Pass the collection to a callback and return the result."""
        return callback(self)

    def partition(self, callback: ItemCallback) -> Tuple['Collection', 'Collection']:
        """Split items into those passing a callback and those failing it."""
        call = _bind(callback)
        passed: Items = {}
        failed: Items = {}

        for index, (key, value) in enumerate(list(self._items.items())):
            if call(value, key, index):
                passed[key] = value
            else:
                failed[key] = value

        return self._make(passed), self._make(failed)

    # Sorting
    @staticmethod
    def _default_sort_key(candidates: List[Any]) -> Callable[[Any], Any]:
        """Sort numerically when everything is numeric, otherwise by string form."""
        if all(is_numeric(candidate) for candidate in candidates):
            return to_numeric
        return to_string

    def sort(self, comparator: Optional[Comparator] = None) -> 'Collection':
        """Sort the items by value in place, keeping keys."""
        entries = list(self._items.items())
        if comparator is None:
            sort_key = self._default_sort_key([value for _, value in entries])
        else:
            sort_key = cmp_to_key(comparator)

        entries.sort(key=lambda entry: sort_key(entry[1]))
        self._items = dict(entries)
        return self

    def ksort(self, comparator: Optional[Comparator] = None) -> 'Collection':
        """Sort the items by key in place."""
        entries = list(self._items.items())
        if comparator is None:
            sort_key = self._default_sort_key([key for key, _ in entries])
        else:
            sort_key = cmp_to_key(comparator)

        entries.sort(key=lambda entry: sort_key(entry[0]))
        self._items = dict(entries)
        return self

    # Aggregating
    def _numeric_values(self) -> List[Union[int, float]]:
        return [to_numeric(value) for value in self._items.values() if is_numeric(value)]

    def sum(self) -> Union[int, float]:
        """Sum the numeric items."""
        return sum(self._numeric_values())

    def product(self) -> Union[int, float]:
        """Multiply the numeric items (0 for an empty collection)."""
        if self.is_empty():
            return 0
        return math.prod(self._numeric_values())

    def average(self) -> Union[int, float]:
        """Get the mean of the numeric items."""
        numbers = self._numeric_values()
        if not numbers:
            return 0
        return sum(numbers) / len(numbers)

    def median(self) -> Union[int, float]:
        """Get the median of the numeric items."""
        numbers = sorted(self._numeric_values())
        count = len(numbers)
        if not count:
            return 0

        middle = count // 2
        if count % 2:
            return numbers[middle]
        return (numbers[middle - 1] + numbers[middle]) / 2

    def mode(self) -> Union[int, float]:
        """Get the most frequent numeric item.

        Ties go to the value whose first occurrence comes last.
        """
        frequency = self.filter(is_numeric).frequency().sort()
        if frequency.is_empty():
            return 0
        return to_numeric(frequency.keys().pop())

    def min(self) -> Union[int, float]:
        """Get the smallest numeric item."""
        numbers = self._numeric_values()
        return min(numbers) if numbers else 0

    def max(self) -> Union[int, float]:
        """Get the largest numeric item."""
        numbers = self._numeric_values()
        return max(numbers) if numbers else 0

    def frequency(self) -> 'Collection':
        """Count occurrences of each scalar value, keyed by its string form."""
        counts = Counter(to_string(value) for value in self._items.values() if is_scalar(value))
        return self._make(dict(counts))

    # Tabular data
    def get_column(self, column: Any) -> 'Collection':
        """Get the value under a key from every row that has it.

        Rows that are not traversable or lack the key are skipped.
        """
        if not self._is_key(column):
            return self._make({})

        cells = []
        for row in self._items.values():
            if not is_traversable(row):
                continue
            fields = to_array(row)
            if column in fields:
                cells.append(fields[column])
        return self._make(self._reindexed(cells))

    def is_tabular(self) -> bool:
        """Check if every row is traversable and shares the first row's keys."""
        rows = list(self._items.values())
        if not rows:
            return True
        if not is_traversable(rows[0]):
            return False

        expected = set(to_array(rows[0]))
        return all(is_traversable(row) and set(to_array(row)) == expected for row in rows)

    # Cursor
    def current(self) -> Any:
        """Get the value under the cursor."""
        if not self.valid():
            return None
        return self._items[self.key()]

    def key(self) -> Any:
        """Get the key under the cursor."""
        if not self.valid():
            return None
        return next(islice(self._items, self._position, None))

    def next(self) -> Any:
        """Move the cursor forward and return the new current value."""
        self._position += 1
        return self.current()

    def rewind(self) -> None:
        """Move the cursor back to the first item."""
        self._position = 0

    def valid(self) -> bool:
        """Check if the cursor points at an item."""
        return 0 <= self._position < len(self._items)

    # Serialization
    def json_serialize(self) -> Union[List[Any], Dict[Any, Any]]:
        """Get the items in JSON shape: a list for list collections, else a dict."""
        serialized = {
            key: value.json_serialize() if isinstance(value, Collection) else value
            for key, value in self._items.items()
        }
        if self._is_list():
            return list(serialized.values())
        return serialized

    def to_json(self, **kwargs: Any) -> str:
        """Convert collection to JSON."""
        return json.dumps(self.json_serialize(), default=_json_default, **kwargs)

    # Magic methods
    def __iter__(self) -> Iterator[Any]:
        """Iterate over values."""
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __contains__(self, value: Any) -> bool:
        """Check if a value is in the collection."""
        return any(_strict_equals(value, item) for item in self._items.values())

    def __getitem__(self, key: Any) -> Any:
        if not self.has(key):
            raise NotFoundError.key(key)
        return self._items[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Any) -> None:
        self.delete(key)

    def __repr__(self) -> str:
        return f"Collection({self._items!r})"

    def __str__(self) -> str:
        return str(self._items)
