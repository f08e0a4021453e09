#!/usr/bin/env python3
"""
Generating Scripts
==================
A script builds one word at a time in a small state machine:

    PRE_ITERATE -> ITERATE (budget times) -> POST_ITERATE -> DONE

pre_iterate seeds the buffer and sets ``iterations``; that number is read
once, so changing it from on_iterate has no effect. Calling terminate()
stops the iteration early and skips post_iterate. The finished buffer is
passed through the output filter.

Scripts ask the library's analyzers for distributions with next(); a
missing analyzer, or one returning the wrong kind of keys, simply yields
None.
"""

import logging
import random
import time
from enum import Enum
from typing import Optional

from garbler.analyzers import (
    Analyzer,
    DistributionKind,
    ALPHABET,
    CHAR_BEGIN,
    CHAR_END,
    COMMON_ENDINGS,
    INFLUENCE,
    LENGTH_CORRELATION,
    REPETITIONS,
    WORD_LENGTH,
)
from garbler.config import GenerationConfig
from garbler.heatmap import KeyedHistogram, random_from_cdf, random_key, trim
from garbler.translator import Translator

logger = logging.getLogger(__name__)


class ScriptState(Enum):
    """Where create_word currently is."""
    PRE_ITERATE = "pre_iterate"
    ITERATE = "iterate"
    POST_ITERATE = "post_iterate"
    DONE = "done"


class GarblerScript:
    """
    Base class for word generating scripts.

    Subclasses override the hooks they need; every hook is a no-op here.
    """

    def __init__(self, output_filter: Translator = None, rng: random.Random = None):
        self.library = None
        self.output_filter = output_filter or Translator.identity()
        self.rng = rng or random.Random()
        self.buffer = ""
        self.iterations = 0
        self.state = ScriptState.DONE
        self._terminated = False

    # -------------------------------------------------------------------------
    # Word construction
    # -------------------------------------------------------------------------

    def create_word(self, context: str) -> str:
        self.buffer = ""
        self.iterations = 1
        self._terminated = False

        self.state = ScriptState.PRE_ITERATE
        self.pre_iterate(context)

        self.state = ScriptState.ITERATE
        budget = max(0, self.iterations)
        for _ in range(budget):
            if self._terminated:
                break
            self.on_iterate(context)

        if not self._terminated:
            self.state = ScriptState.POST_ITERATE
            self.post_iterate(context)

        self.state = ScriptState.DONE
        word = self.output_filter.translate(self.buffer)
        self.buffer = ""
        return word

    def terminate(self):
        """Stop iterating after the current step and skip post_iterate."""
        self._terminated = True

    @property
    def terminated(self) -> bool:
        return self._terminated

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def on_start(self):
        pass

    def on_complete(self, line: str):
        pass

    def pre_iterate(self, context: str):
        pass

    def on_iterate(self, context: str):
        pass

    def post_iterate(self, context: str):
        pass

    # -------------------------------------------------------------------------
    # Analyzer access
    # -------------------------------------------------------------------------

    def analyzer(self, name: str) -> Optional[Analyzer]:
        if self.library is None:
            return None
        return self.library.get_analyzer(name)

    def next(self, name: str, context: str, prefix: str = None,
             kind: DistributionKind = None) -> Optional[KeyedHistogram]:
        """
        Query a named analyzer.

        Args:
            name: Registry name (case-insensitive)
            context: Text generated so far on this line
            prefix: Word prefix to query with; defaults to the buffer
            kind: Expected key type; a mismatching analyzer yields None

        Returns:
            The analyzer's distribution, or None if unavailable
        """
        analyzer = self.analyzer(name)
        if analyzer is None:
            logger.debug(f"No analyzer named {name}")
            return None
        if kind is not None and analyzer.kind is not kind:
            logger.warning(f"Analyzer {name} returns {analyzer.kind.value} keys, expected {kind.value}")
            return None
        return analyzer.query(context, self.buffer if prefix is None else prefix)


class DefaultScript(GarblerScript):
    """
    The standard generator.

    Picks a first letter and a target length, appends letters from the
    letter influence analyzer (resampling unlikely repeats, stopping early
    when the last letter usually ends words), then adds a common ending.
    """

    def __init__(self, config: GenerationConfig = None, output_filter: Translator = None,
                 rng: random.Random = None):
        super().__init__(output_filter=output_filter, rng=rng)
        self.config = config or GenerationConfig()
        self._started = 0.0
        self.elapsed_ms = 0.0

    def on_start(self):
        self._started = time.perf_counter()

    def on_complete(self, line: str):
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000
        logger.debug(f"[{self.elapsed_ms:.0f}ms] {line}")

    def _letters(self, context: str) -> Optional[KeyedHistogram]:
        letters = self.next(INFLUENCE, context, kind=DistributionKind.CHARACTER)
        if letters is None or letters.is_empty:
            letters = self.next(ALPHABET, context, kind=DistributionKind.CHARACTER)
        return letters

    def _target_length(self, context: str) -> Optional[int]:
        lengths = self.next(LENGTH_CORRELATION, context, kind=DistributionKind.LENGTH)
        if lengths is None:
            lengths = self.next(WORD_LENGTH, context, kind=DistributionKind.LENGTH)
        if lengths is None:
            return None

        trimmed = trim(lengths, self.config.length_trim)
        return random_from_cdf(trimmed if not trimmed.is_empty else lengths, self.rng)

    def pre_iterate(self, context: str):
        first = random_from_cdf(self.next(CHAR_BEGIN, context, kind=DistributionKind.CHARACTER), self.rng)
        if first is None:
            self.iterations = 0
            self.terminate()
            return

        self.buffer += first
        length = self._target_length(context)
        self.iterations = max(0, (length or 0) - self.config.ending_padding)

    def on_iterate(self, context: str):
        candidate = random_from_cdf(self._letters(context), self.rng)
        if candidate is not None and self.buffer and candidate == self.buffer[-1]:
            runs = self.next(REPETITIONS, context, kind=DistributionKind.CHARACTER)
            odds = runs.get_value(candidate) if runs is not None else 0.0
            if 0 < odds < self.config.repeat_threshold and self.rng.random() <= odds:
                candidate = random_from_cdf(self._letters(context), self.rng)

        if candidate is not None:
            self.buffer += candidate

        ends = self.next(CHAR_END, context, kind=DistributionKind.LENGTH)
        if ends is not None:
            odds = ends.get_value(0)
            if odds > self.config.end_threshold and self.rng.random() < odds:
                self.terminate()

    def post_iterate(self, context: str):
        ending = random_key(self.next(COMMON_ENDINGS, context, kind=DistributionKind.STRING), self.rng)
        if ending is not None:
            self.buffer += ending


__all__ = [
    'ScriptState',
    'GarblerScript',
    'DefaultScript',
]
