#!/usr/bin/env python3
"""
Common Endings
==============
Collects word endings and lets them settle into shared tails.

Endings are stored reversed, bucketed by the letter just before the ending.
When a new ending shares its first min_radius (reversed) letters with
stored ones but then diverges, the new ending and every diverging stored
one are cut back to the longest prefix they all share, and re-bucketed
under whichever letter now precedes the shortened tail:

    analyze("bakery")   # "ery" stored under 'k'
    analyze("winery")   # "ery" stored under 'n'
    analyze("mercury")  # "ury" splits off after "ry": every "ery" and
                        # "ury" becomes "ry", stored under 'e' and 'u'
"""

from typing import Dict, List, Optional, Tuple

from garbler.analyzers.base import Analyzer, DistributionKind
from garbler.errors import InvalidConfiguration
from garbler.heatmap import KeyedHistogram


def _common_prefix_length(a: str, b: str) -> int:
    length = 0
    for x, y in zip(a, b):
        if x != y:
            break
        length += 1
    return length


class CommonEndingAnalyzer(Analyzer):
    """Candidate word endings, keyed by the letter before the ending."""

    kind = DistributionKind.STRING

    def __init__(self, min_radius: int = 2, max_radius: int = 3):
        if min_radius < 1:
            raise InvalidConfiguration("Minimum ending radius must be greater than 0")
        if max_radius < min_radius:
            raise InvalidConfiguration("Maximum ending radius must be at least the minimum")
        self.min_radius = min_radius
        self.max_radius = max_radius
        self._endings: Dict[str, List[str]] = {}

    def _store(self, key: str, reversed_ending: str):
        bucket = self._endings.setdefault(key, [])
        if reversed_ending not in bucket:
            bucket.append(reversed_ending)

    def _discard(self, key: str, reversed_ending: str):
        bucket = self._endings.get(key)
        if bucket is None:
            return
        if reversed_ending in bucket:
            bucket.remove(reversed_ending)
        if not bucket:
            del self._endings[key]

    def analyze(self, word: str):
        if len(word) <= self.min_radius:
            return

        length = min(self.max_radius, len(word) - 1)
        key = word[-length - 1]
        reversed_ending = word[-length:][::-1]
        head = reversed_ending[:self.min_radius]

        relevant: List[Tuple[str, str]] = [
            (bucket_key, stored)
            for bucket_key, bucket in self._endings.items()
            for stored in bucket
            if stored.startswith(head)
        ]

        new_length = len(reversed_ending)
        for _, stored in relevant:
            new_length = min(new_length, _common_prefix_length(stored, reversed_ending))

        if new_length == len(reversed_ending):
            self._store(key, reversed_ending)
            return

        shortened = reversed_ending[:new_length]
        self._store(reversed_ending[new_length], shortened)
        for bucket_key, stored in relevant:
            if stored != shortened:
                self._discard(bucket_key, stored)
                self._store(stored[new_length], shortened)

    def endings(self, key: str) -> Tuple[str, ...]:
        """Endings (in reading order) stored after the given letter."""
        return tuple(stored[::-1] for stored in self._endings.get(key, ()))

    @property
    def keys(self) -> List[str]:
        return sorted(self._endings)

    def query(self, context: str, prefix: str) -> Optional[KeyedHistogram]:
        if not prefix:
            return None
        bucket = self._endings.get(prefix[-1])
        if not bucket:
            return None

        result = KeyedHistogram()
        for stored in bucket:
            result.increment(stored[::-1])
        return result

    def clear(self):
        self._endings = {}
