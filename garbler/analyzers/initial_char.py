#!/usr/bin/env python3
"""Distribution of the letters words start with."""

from typing import Optional

from garbler.analyzers.base import Analyzer, DistributionKind, copy_or_none
from garbler.heatmap import KeyedHistogram


class InitialCharDistributionAnalyzer(Analyzer):
    """First letters of words."""

    kind = DistributionKind.CHARACTER

    def __init__(self):
        self._initials = KeyedHistogram()

    def analyze(self, word: str):
        if word:
            self._initials.increment(word[0])

    def query(self, context: str, prefix: str) -> Optional[KeyedHistogram]:
        return copy_or_none(self._initials)

    def clear(self):
        self._initials = KeyedHistogram()
