#!/usr/bin/env python3
"""
Word Length
===========
Word length statistics: overall, correlated with the first letter, and
correlated with the length of the word before.
"""

import re
from typing import Dict, Optional

from garbler.analyzers.base import Analyzer, DistributionKind, copy_or_none
from garbler.heatmap import KeyedHistogram


class WordLengthCorrelationAnalyzer(Analyzer):
    """Word lengths, given the first letter."""

    kind = DistributionKind.LENGTH

    def __init__(self):
        self._maps: Dict[str, KeyedHistogram] = {}

    def analyze(self, word: str):
        if not word:
            return
        self._maps.setdefault(word[0], KeyedHistogram()).increment(len(word))

    def query(self, context: str, prefix: str) -> Optional[KeyedHistogram]:
        if not prefix:
            return None
        return copy_or_none(self._maps.get(prefix[0]))

    def clear(self):
        self._maps = {}


class WordLengthDistributionAnalyzer(Analyzer):
    """Word lengths over the whole corpus."""

    kind = DistributionKind.LENGTH

    def __init__(self):
        self._lengths = KeyedHistogram()

    def analyze(self, word: str):
        if word:
            self._lengths.increment(len(word))

    def query(self, context: str, prefix: str) -> Optional[KeyedHistogram]:
        return copy_or_none(self._lengths)

    def clear(self):
        self._lengths = KeyedHistogram()


class SequentialWordLengthAnalyzer(Analyzer):
    """
    Word lengths, given the length of the previous word.

    Training treats every analyzed word as following the one analyzed
    before it. At query time the previous word is the last run of word
    characters in the context (the line generated so far), so the first
    word of a line has no distribution.
    """

    kind = DistributionKind.LENGTH

    _WORD = re.compile(r"\w+")

    def __init__(self):
        self._maps: Dict[int, KeyedHistogram] = {}
        self._previous = 0

    def analyze(self, word: str):
        if not word:
            return
        if self._previous:
            self._maps.setdefault(self._previous, KeyedHistogram()).increment(len(word))
        self._previous = len(word)

    def query(self, context: str, prefix: str) -> Optional[KeyedHistogram]:
        words = self._WORD.findall(context)
        if not words:
            return None
        return copy_or_none(self._maps.get(len(words[-1])))

    def clear(self):
        self._maps = {}
        self._previous = 0
