#!/usr/bin/env python3
"""
Repeat Letter
=============
Tracks which letters appear in runs ("ll", "sss") and how long those runs
get. Single letters are not recorded at all; a run of n identical letters
is recorded in the bucket for length min(n, max_run).

    analyzer = RepeatLetterAnalyzer()
    analyzer.analyze("aabbaaa")
    analyzer.runs(2).keys()     # ('a', 'b')
    analyzer.runs(3).keys()     # ('a',)
"""

from itertools import groupby
from typing import Dict, Optional

from garbler.analyzers.base import Analyzer, DistributionKind, copy_or_none
from garbler.errors import InvalidConfiguration
from garbler.heatmap import KeyedHistogram


class RepeatLetterAnalyzer(Analyzer):
    """Letters that repeat, by run length."""

    kind = DistributionKind.CHARACTER

    def __init__(self, max_run: int = 3):
        if max_run < 2:
            raise InvalidConfiguration("Maximum run length must be at least 2")
        self.max_run = max_run
        self._runs: Dict[int, KeyedHistogram] = {}

    def analyze(self, word: str):
        for char, group in groupby(word):
            length = sum(1 for _ in group)
            if length >= 2:
                bucket = min(length, self.max_run)
                self._runs.setdefault(bucket, KeyedHistogram()).increment(char)

    def runs(self, length: int) -> Optional[KeyedHistogram]:
        """Letters seen in runs of the given (capped) length."""
        return copy_or_none(self._runs.get(min(length, self.max_run)))

    @staticmethod
    def trailing_run(prefix: str) -> int:
        """Length of the run of identical letters that ends prefix."""
        if not prefix:
            return 0
        last = prefix[-1]
        length = 0
        for char in reversed(prefix):
            if char != last:
                break
            length += 1
        return length

    def query(self, context: str, prefix: str) -> Optional[KeyedHistogram]:
        """Letters known to form a run one longer than the one ending prefix."""
        if not prefix:
            return None
        return self.runs(self.trailing_run(prefix) + 1)

    def clear(self):
        self._runs = {}
