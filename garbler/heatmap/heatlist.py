#!/usr/bin/env python3
"""
Weighted Histograms
===================
Dense, index-addressed frequency distributions.

WeightedHistogram keeps its values normalized while samples stream in:
each increment scales every existing slot by (1 - w) and adds w to the
target slot, where w = amount / total_samples. Starting from an empty list
(or one that sums to 1) the total is 1 after every increment, so the list
never has to be re-scanned to renormalize.

UnboundHistogram is the raw accumulator produced by cumulative sums, sums of
two lists and scalar products. It has no increment and makes no promise
about its total.

Usage:
    hist = WeightedHistogram(3)
    hist.increment(0)
    hist.increment(1)
    hist.increment(0)
    hist.values          # [0.666..., 0.333..., 0.0]
    UnboundHistogram.cumulative(hist).values   # [0.666..., 1.0, 1.0]
"""

from typing import List, Optional, Sequence

from garbler.errors import IndexOutOfRange, InvalidSize

# Tolerance used when deciding whether a list sums to 1
NORMALIZATION_EPSILON = 1e-5

# Removed slots carrying less mass than this are dropped without rescaling
NEGLIGIBLE_MASS = 1e-6


class _Histogram:
    """Shared read-only behavior of bounded and unbound histograms."""

    def __init__(self, size: int = 0):
        if size < 0:
            raise InvalidSize(f"Unable to make a histogram of negative size ({size})")
        self._values: List[float] = [0.0] * size
        self._samples = 0

    def __len__(self) -> int:
        return len(self._values)

    @property
    def size(self) -> int:
        return len(self._values)

    @property
    def sample_count(self) -> int:
        return self._samples

    @property
    def values(self) -> List[float]:
        """A copy of the current values."""
        return list(self._values)

    @property
    def empty(self) -> bool:
        return self._samples <= 0

    def get_value(self, index: int) -> float:
        self._range_check(index)
        return self._values[index]

    @property
    def total(self) -> float:
        return sum(self._values)

    def sum(self, start: int = 0, end: Optional[int] = None) -> float:
        """Sum of the values in [start, end)."""
        end = len(self._values) if end is None else end
        if not (0 <= start <= len(self._values)) or not (0 <= end <= len(self._values)):
            raise IndexOutOfRange(f"Range [{start}, {end}) outside histogram of size {len(self._values)}")
        return sum(self._values[start:end])

    def max(self, start: int = 0, end: Optional[int] = None) -> float:
        return max(self._slice(start, end))

    def min(self, start: int = 0, end: Optional[int] = None) -> float:
        return min(self._slice(start, end))

    def _slice(self, start: int, end: Optional[int]) -> List[float]:
        end = len(self._values) if end is None else end
        if not (0 <= start < len(self._values)) or not (start < end <= len(self._values)):
            raise IndexOutOfRange(f"Range [{start}, {end}) outside histogram of size {len(self._values)}")
        return self._values[start:end]

    def _range_check(self, index: int):
        if index < 0 or index >= len(self._values):
            raise IndexOutOfRange(f"Index {index} outside histogram of size {len(self._values)}")

    def _format(self, open_char: str, close_char: str) -> str:
        return open_char + ','.join(f"{v:g}" for v in self._values) + close_char


class WeightedHistogram(_Histogram):
    """
    Bounded histogram whose values sum to 0 or 1.

    The normalized flag is cleared by operations that may break the
    invariant (deleting a slot without redistribution, mark_dirty) and
    restored by normalize() or verify_normalization().
    """

    def __init__(self, size: int = 0):
        super().__init__(size)
        self._normalized = True

    @property
    def normalized(self) -> bool:
        return self._normalized

    def increment(self, index: int, amount: int = 1) -> float:
        """
        Add samples to a slot and rescale the rest.

        Returns:
            The new value at index
        """
        self._range_check(index)
        if amount <= 0:
            raise ValueError("Count has to be greater than zero")

        self._samples += amount
        weight = amount / self._samples
        keep = 1.0 - weight

        values = self._values
        for i in range(len(values)):
            values[i] *= keep
        values[index] += weight
        return values[index]

    def normalize(self):
        """Scale every value so the total is 1 (a zero list stays zero)."""
        total = self.total
        if total > 0:
            factor = 1.0 / total
            self._values = [v * factor for v in self._values]
        self._normalized = True

    def equalize(self) -> float:
        """Force a uniform distribution and return the per-slot value."""
        if not self._values:
            raise InvalidSize("Cannot equalize a histogram of size 0")
        value = 1.0 / len(self._values)
        self._values = [value] * len(self._values)
        self._normalized = True
        return value

    def reset(self):
        """Zero the values but keep the sample count."""
        self._values = [0.0] * len(self._values)

    def clear(self):
        self._values = [0.0] * len(self._values)
        self._samples = 0
        self._normalized = True

    def mark_dirty(self):
        self._normalized = False

    def verify_normalization(self) -> bool:
        """Set the normalized flag from the actual total (0 or 1 +/- epsilon)."""
        total = self.total
        self._normalized = total == 0 or abs(total - 1.0) <= NORMALIZATION_EPSILON
        return self._normalized

    def copy(self) -> 'WeightedHistogram':
        result = WeightedHistogram(len(self._values))
        result._values = list(self._values)
        result._samples = self._samples
        result._normalized = self._normalized
        return result

    # -------------------------------------------------------------------------
    # Slot hooks used by KeyedHistogram
    # -------------------------------------------------------------------------

    def _insert_slot(self, index: int):
        """Insert a zero slot at index, shifting later slots right."""
        if index < 0 or index > len(self._values):
            raise IndexOutOfRange(f"Cannot insert at {index} in histogram of size {len(self._values)}")
        self._values.insert(index, 0.0)

    def _overwrite(self, index: int, value: float):
        """Replace a value directly; the list is flagged as denormalized."""
        self._range_check(index)
        self._values[index] = value
        self._normalized = False

    def _delete_slot(self, index: int, redistribute: bool = True) -> float:
        """
        Remove a slot and return its old value.

        With redistribute the remaining values are scaled up so the total is
        unchanged; without it the histogram is flagged as denormalized. When
        no mass is left the histogram starts over as if freshly built.
        """
        self._range_check(index)
        old_value = self._values.pop(index)
        remaining = sum(self._values)

        if remaining <= 0:
            self._values = [0.0] * len(self._values)
            self._samples = 0
            self._normalized = True
        elif old_value >= NEGLIGIBLE_MASS:
            if redistribute:
                factor = (remaining + old_value) / remaining
                self._values = [v * factor for v in self._values]
            else:
                self._normalized = False
        return old_value

    # -------------------------------------------------------------------------
    # Combinators
    # -------------------------------------------------------------------------

    @staticmethod
    def interpolate(a: 'WeightedHistogram', b: 'WeightedHistogram', t: float) -> 'WeightedHistogram':
        """Per-slot (1 - t) * a + t * b."""
        if len(a) != len(b):
            raise ValueError("Referenced histograms must be of same size")
        if t < 0 or t > 1:
            raise ValueError("Interpolation value must be between 0 and 1")

        result = WeightedHistogram(len(a))
        result._values = [va * (1.0 - t) + vb * t for va, vb in zip(a._values, b._values)]
        result._samples = a._samples + b._samples
        result._normalized = a._normalized and b._normalized
        return result

    @staticmethod
    def average(a: 'WeightedHistogram', b: 'WeightedHistogram') -> 'WeightedHistogram':
        return WeightedHistogram.interpolate(a, b, 0.5)

    @staticmethod
    def average_all(lists: Sequence['WeightedHistogram']) -> 'WeightedHistogram':
        if not lists:
            return WeightedHistogram(0)

        size = len(lists[0])
        weight = 1.0 / len(lists)
        result = WeightedHistogram(size)
        for source in lists:
            if len(source) != size:
                raise ValueError("Referenced histograms must be of same size")
            for i, value in enumerate(source._values):
                result._values[i] += value * weight
            result._samples += source._samples
            result._normalized = result._normalized and source._normalized
        return result

    @classmethod
    def bind_from(cls, source: _Histogram) -> 'WeightedHistogram':
        """Build a normalized copy of any histogram."""
        result = cls(len(source))
        result._values = source.values
        result._samples = source.sample_count
        result.normalize()
        return result

    def __repr__(self) -> str:
        return self._format('{', '}') if self._normalized else self._format('<', '>')


class UnboundHistogram(_Histogram):
    """Raw accumulator; values carry no normalization guarantee."""

    def set(self, index: int, value: float):
        self._range_check(index)
        self._values[index] = value

    def add(self, index: int, value: float) -> float:
        self._range_check(index)
        self._values[index] += value
        return self._values[index]

    def copy(self) -> 'UnboundHistogram':
        result = UnboundHistogram(len(self._values))
        result._values = list(self._values)
        result._samples = self._samples
        return result

    @classmethod
    def cumulative(cls, source: _Histogram, start: int = 0, count: Optional[int] = None) -> 'UnboundHistogram':
        """Running sum of source over [start, start + count)."""
        values = cls._window(source, start, count)
        result = cls(len(values))
        running = 0.0
        for i, value in enumerate(values):
            running += value
            result._values[i] = running
        return result

    @classmethod
    def extract(cls, source: _Histogram, start: int = 0, count: Optional[int] = None) -> 'UnboundHistogram':
        values = cls._window(source, start, count)
        result = cls(len(values))
        result._values = values
        return result

    @classmethod
    def sum_of(cls, a: _Histogram, b: _Histogram) -> 'UnboundHistogram':
        if len(a) != len(b):
            raise ValueError("Referenced histograms must be of same size")
        result = cls(len(a))
        result._values = [va + vb for va, vb in zip(a.values, b.values)]
        result._samples = a.sample_count + b.sample_count
        return result

    @classmethod
    def product(cls, a: _Histogram, factor: float) -> 'UnboundHistogram':
        result = cls(len(a))
        result._values = [v * factor for v in a.values]
        result._samples = int(a.sample_count * factor)
        return result

    @staticmethod
    def _window(source: _Histogram, start: int, count: Optional[int]) -> List[float]:
        size = len(source)
        count = size - start if count is None else count
        if start < 0 or count < 0 or start + count > size:
            raise IndexOutOfRange(f"Window [{start}, {start + count}) outside histogram of size {size}")
        return source.values[start:start + count]

    def __repr__(self) -> str:
        return self._format('<', '>')


__all__ = [
    'NORMALIZATION_EPSILON',
    'WeightedHistogram',
    'UnboundHistogram',
]
