#!/usr/bin/env python3
"""
Keyed Histograms
================
A WeightedHistogram addressed by sorted keys instead of dense indices.

Keys (characters, lengths, ending strings) are kept in ascending order in a
plain list; lookups are binary searches, so reads cost O(log n) and an
unknown key simply reads as 0. The backing histogram slot i always belongs
to keys[i].

Usage:
    hist = KeyedHistogram()
    for c in "banana":
        hist.increment(c)
    hist.get_value('a')      # 0.5
    hist.keys()              # ('a', 'b', 'n')
"""

from bisect import bisect_left
from types import MappingProxyType
from typing import Dict, Generic, Iterator, List, Mapping, Optional, Tuple, TypeVar

from garbler.errors import IndexOutOfRange
from garbler.heatmap.heatlist import WeightedHistogram

K = TypeVar('K')


class KeyedHistogram(Generic[K]):
    """Sorted-key map onto a normalized WeightedHistogram."""

    def __init__(self):
        self._keys: List[K] = []
        self._heat = WeightedHistogram(0)

    # -------------------------------------------------------------------------
    # Size and flags
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def size(self) -> int:
        return len(self._keys)

    @property
    def is_empty(self) -> bool:
        return not self._keys

    @property
    def normalized(self) -> bool:
        return self._heat.normalized

    @property
    def sample_count(self) -> int:
        return self._heat.sample_count

    @property
    def total(self) -> float:
        return self._heat.total

    def normalize(self):
        self._heat.normalize()

    def verify_normalization(self) -> bool:
        return self._heat.verify_normalization()

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def position_of(self, key: K) -> int:
        """Index of the first key >= key (the insertion point)."""
        return bisect_left(self._keys, key)

    def index_of(self, key: K) -> int:
        """Index of key, or -1 when absent."""
        index = bisect_left(self._keys, key)
        if index < len(self._keys) and self._keys[index] == key:
            return index
        return -1

    def __contains__(self, key) -> bool:
        return self.index_of(key) >= 0

    def get_value(self, key: K) -> float:
        index = self.index_of(key)
        return self._heat.get_value(index) if index >= 0 else 0.0

    def key_at(self, index: int) -> K:
        if index < 0 or index >= len(self._keys):
            raise IndexOutOfRange(f"Index {index} outside map of size {len(self._keys)}")
        return self._keys[index]

    def value_at(self, index: int) -> float:
        return self._heat.get_value(index)

    def keys(self) -> Tuple[K, ...]:
        return tuple(self._keys)

    def values(self) -> List[float]:
        return self._heat.values

    def items(self) -> List[Tuple[K, float]]:
        """(key, value) pairs in ascending key order."""
        return list(zip(self._keys, self._heat.values))

    def __iter__(self) -> Iterator[K]:
        return iter(tuple(self._keys))

    def to_dict(self) -> Mapping[K, float]:
        """Read-only snapshot of the key/value pairs."""
        return MappingProxyType(dict(self.items()))

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def _insert(self, key: K, index: int):
        self._keys.insert(index, key)
        self._heat._insert_slot(index)

    def touch(self, key: K) -> bool:
        """
        Make sure a key exists without adding samples.

        The new key is seeded at 0. Once the map holds samples this flags it
        as denormalized until the next increment redistributes mass.

        Returns:
            True if a new key was made
        """
        index = self.position_of(key)
        if index < len(self._keys) and self._keys[index] == key:
            return False
        self._insert(key, index)
        if self._heat.sample_count > 0:
            self._heat.mark_dirty()
        return True

    def increment(self, key: K, amount: int = 1) -> float:
        """
        Add samples to a key, creating it if needed.

        Returns:
            The new value at key
        """
        index = self.position_of(key)
        if index >= len(self._keys) or self._keys[index] != key:
            self._insert(key, index)
        value = self._heat.increment(index, amount)
        if not self._heat.normalized:
            self._heat.verify_normalization()
        return value

    def increment_if_exists(self, key: K, amount: int = 1) -> float:
        index = self.index_of(key)
        if index < 0:
            return 0.0
        return self.increment(key, amount)

    def set(self, key: K, value: float):
        """Overwrite the value at key. This flags the map as denormalized."""
        index = self.position_of(key)
        if index >= len(self._keys) or self._keys[index] != key:
            self._insert(key, index)
        self._heat._overwrite(index, value)

    def remove_key(self, key: K) -> bool:
        """Delete a key, spreading its mass over the remaining keys."""
        index = self.index_of(key)
        if index < 0:
            return False
        del self._keys[index]
        self._heat._delete_slot(index, redistribute=True)
        return True

    def remove_key_unsafe(self, key: K) -> bool:
        """Delete a key without redistributing; may denormalize the map."""
        index = self.index_of(key)
        if index < 0:
            return False
        del self._keys[index]
        self._heat._delete_slot(index, redistribute=False)
        return True

    def clear(self):
        self._keys = []
        self._heat = WeightedHistogram(0)

    def copy(self) -> 'KeyedHistogram[K]':
        result = KeyedHistogram()
        result._keys = list(self._keys)
        result._heat = self._heat.copy()
        return result

    @classmethod
    def from_counts(cls, counts: Dict[K, int]) -> 'KeyedHistogram[K]':
        """Build a map by incrementing each key by its count."""
        result = cls()
        for key, count in counts.items():
            if count > 0:
                result.increment(key, count)
        return result

    def __repr__(self) -> str:
        open_char, close_char = ('{', '}') if self.normalized else ('<', '>')
        body = ', '.join(f"{k}={v:g}" for k, v in self.items())
        return f"{open_char}{body}{close_char}"


def most_likely(hist: Optional[KeyedHistogram]) -> Optional[object]:
    """Key with the highest value, or None for an empty map."""
    if hist is None or hist.is_empty:
        return None
    return max(hist.items(), key=lambda item: item[1])[0]


__all__ = [
    'KeyedHistogram',
    'most_likely',
]
