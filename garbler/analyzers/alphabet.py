#!/usr/bin/env python3
"""Overall letter frequencies of the corpus."""

from typing import Optional

from garbler.analyzers.base import Analyzer, DistributionKind, copy_or_none
from garbler.heatmap import KeyedHistogram


class AlphabetAnalyzer(Analyzer):
    """Letter frequency over every analyzed word."""

    kind = DistributionKind.CHARACTER

    def __init__(self):
        self._letters = KeyedHistogram()

    def analyze(self, word: str):
        for char in word:
            self._letters.increment(char)

    def query(self, context: str, prefix: str) -> Optional[KeyedHistogram]:
        return copy_or_none(self._letters)

    def clear(self):
        self._letters = KeyedHistogram()
