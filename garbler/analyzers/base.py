#!/usr/bin/env python3
"""
Analyzer Base Class
===================
Common interface of every statistical collector in a Library.

An analyzer consumes words one at a time during training and, at
generation time, answers "given this context and the word so far, what is
the distribution over the next unit?". The unit type is declared up front
with a DistributionKind so scripts can reject a mismatched analyzer without
inspecting the keys it returns.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from garbler.heatmap import KeyedHistogram


class DistributionKind(Enum):
    """Key type of the histograms an analyzer returns."""
    CHARACTER = "character"
    LENGTH = "length"
    STRING = "string"


class Analyzer(ABC):
    """
    Abstract base class for analyzers.

    Subclasses set ``kind`` and implement analyze/query/clear. Queries must
    return a fresh histogram (or None when the analyzer has nothing for the
    given prefix) so callers can never mutate the trained state.
    """

    kind: DistributionKind = DistributionKind.CHARACTER

    @abstractmethod
    def analyze(self, word: str):
        """Train on one word. Empty words are ignored."""

    @abstractmethod
    def query(self, context: str, prefix: str) -> Optional[KeyedHistogram]:
        """Distribution for the next unit after prefix, or None."""

    @abstractmethod
    def clear(self):
        """Drop everything learned; the analyzer is as freshly built."""

    @property
    def description(self) -> str:
        """One-line summary shown by the info table."""
        return self.__class__.__doc__.strip().splitlines()[0] if self.__class__.__doc__ else ""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value})"


def copy_or_none(hist: Optional[KeyedHistogram]) -> Optional[KeyedHistogram]:
    """Copy of a stored histogram, or None when missing or empty."""
    if hist is None or hist.is_empty:
        return None
    return hist.copy()
