#!/usr/bin/env python3
"""
Letter Influence
================
For every letter, remembers which letters follow it at distance 1, 2, ...
up to a radius. The next-letter distribution for a prefix blends the
distance-d histogram of the letter d places back, weighted by
factor^d, so nearby letters dominate.
"""

from typing import Dict, List, Optional

from garbler.analyzers.base import Analyzer, DistributionKind
from garbler.errors import InvalidConfiguration
from garbler.heatmap import KeyedHistogram, SQRT_HALF, power_series


class LetterInfluenceAnalyzer(Analyzer):
    """Next-letter odds from the preceding letters, decaying with distance."""

    kind = DistributionKind.CHARACTER

    def __init__(self, radius: int = 3, factor: float = SQRT_HALF):
        if radius < 1:
            raise InvalidConfiguration("Radius must be greater than 0")
        if not 0 < factor <= 1:
            raise InvalidConfiguration("Influence factor must be in (0, 1]")
        self.radius = radius
        self.factor = factor
        self._maps: Dict[str, List[KeyedHistogram]] = {}

    def analyze(self, word: str):
        # Too short to say anything about influence
        if len(word) <= 2:
            return

        for i in range(len(word) - 1):
            count = min(len(word) - i - 1, self.radius)
            maps = self._maps.setdefault(word[i], [])
            while len(maps) < count:
                maps.append(KeyedHistogram())
            for distance in range(count):
                maps[distance].increment(word[i + distance + 1])

    def influence(self, char: str, distance: int) -> Optional[KeyedHistogram]:
        """What follows char at the given distance (1-based), as a copy."""
        maps = self._maps.get(char)
        if not maps or distance < 1 or distance > len(maps):
            return None
        return maps[distance - 1].copy()

    def query(self, context: str, prefix: str) -> Optional[KeyedHistogram]:
        count = min(len(prefix), self.radius)
        sources = []
        for distance in range(count):
            maps = self._maps.get(prefix[-1 - distance])
            sources.append(maps[distance] if maps and len(maps) > distance else None)

        if all(source is None for source in sources):
            return None

        result = power_series(sources, self.factor)
        result.normalize()
        return result

    def clear(self):
        self._maps = {}

    @property
    def letters(self) -> List[str]:
        return sorted(self._maps)
