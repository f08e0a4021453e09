#!/usr/bin/env python3
"""
Char End Position
=================
How far from the end of a word each letter tends to appear. Distances are
capped at the radius, so with the default radius of 1 a letter's
histogram only separates "last letter" (0) from "anywhere else" (1). The
value at 0 is what the default script uses as termination odds.
"""

from typing import Dict, Optional

from garbler.analyzers.base import Analyzer, DistributionKind, copy_or_none
from garbler.errors import InvalidConfiguration
from garbler.heatmap import KeyedHistogram


class CharEndPositionAnalyzer(Analyzer):
    """Distance from the word end per letter."""

    kind = DistributionKind.LENGTH

    def __init__(self, radius: int = 1):
        if radius < 1:
            raise InvalidConfiguration("Char end radius must be greater than 0")
        self.radius = radius
        self._maps: Dict[str, KeyedHistogram] = {}

    def analyze(self, word: str):
        for distance, char in enumerate(reversed(word)):
            bucket = min(distance, self.radius)
            self._maps.setdefault(char, KeyedHistogram()).increment(bucket)

    def query(self, context: str, prefix: str) -> Optional[KeyedHistogram]:
        if not prefix:
            return None
        return copy_or_none(self._maps.get(prefix[-1]))

    def clear(self):
        self._maps = {}
