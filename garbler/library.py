#!/usr/bin/env python3
"""
Garbler Library
===============
Owns the analyzers, feeds them words, and runs generating scripts.

Life cycle:
- Open: analyzers can be registered
- Sealed: the first analyze call seals the library; adding analyzers
  raises SealedLibrary until clear() opens it again

Usage:
    library = Library.from_config(LibraryConfig())
    library.analyze_file("corpus.txt")
    print(library.run(DefaultScript(), 8))
"""

import logging
import re
import threading
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from garbler.analyzers import (
    Analyzer,
    AlphabetAnalyzer,
    CharEndPositionAnalyzer,
    CommonEndingAnalyzer,
    InitialCharDistributionAnalyzer,
    LetterInfluenceAnalyzer,
    RepeatLetterAnalyzer,
    WordLengthCorrelationAnalyzer,
    WordLengthDistributionAnalyzer,
    ALPHABET,
    CHAR_BEGIN,
    CHAR_END,
    COMMON_ENDINGS,
    INFLUENCE,
    LENGTH_CORRELATION,
    REPETITIONS,
    WORD_LENGTH,
)
from garbler.config import LibraryConfig
from garbler.errors import NothingAnalyzed, SealedLibrary
from garbler.translator import Translator

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = r'[\s_;:"„0-9\[\]()<>.,!?]+'


class Library:
    """
    Analyzer registry plus the word stream that trains it.

    analyze, analyze_lines, analyze_file, run and clear are serialized with
    a re-entrant lock; run may call analyze again when self-feeding.
    """

    def __init__(self,
                 input_filter: Translator = None,
                 delimiter: str = None,
                 self_feed: bool = False,
                 max_self_feeds: Optional[int] = None):
        self._analyzers: Dict[str, Analyzer] = {}
        self._input_filter = input_filter or Translator.identity()
        self.delimiter = delimiter or DEFAULT_DELIMITER
        self._self_feed = self_feed
        self.max_self_feeds = max_self_feeds
        self._self_feeds = 0
        self._analyzed = 0
        self._sealed = False
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: LibraryConfig = None) -> 'Library':
        """Library with the default analyzers, configured from app.yaml."""
        config = config or LibraryConfig()
        input_filter = Translator.case_insensitive() if config.input_filter == "case" else Translator.identity()
        library = cls(
            input_filter=input_filter,
            delimiter=config.delimiter,
            self_feed=config.self_feed,
            max_self_feeds=config.max_self_feeds,
        )
        library.load_defaults(config)
        return library

    # -------------------------------------------------------------------------
    # Analyzer registry
    # -------------------------------------------------------------------------

    def add_analyzer(self, name: str, analyzer: Analyzer):
        if self._sealed:
            raise SealedLibrary("Analyzers may only be added before analysis")
        self._analyzers[name.upper()] = analyzer
        logger.debug(f"Registered analyzer {name.upper()}: {analyzer!r}")

    def get_analyzer(self, name: str) -> Optional[Analyzer]:
        return self._analyzers.get(name.upper())

    @property
    def analyzer_names(self) -> List[str]:
        return list(self._analyzers)

    @property
    def analyzer_count(self) -> int:
        return len(self._analyzers)

    def load_defaults(self, config: LibraryConfig = None):
        """Register the analyzers the default script expects."""
        config = config or LibraryConfig()
        self.add_analyzer(INFLUENCE, LetterInfluenceAnalyzer(config.influence_radius, config.influence_factor))
        self.add_analyzer(COMMON_ENDINGS, CommonEndingAnalyzer(config.ending_min_radius, config.ending_radius))
        self.add_analyzer(LENGTH_CORRELATION, WordLengthCorrelationAnalyzer())
        self.add_analyzer(WORD_LENGTH, WordLengthDistributionAnalyzer())
        self.add_analyzer(CHAR_BEGIN, InitialCharDistributionAnalyzer())
        self.add_analyzer(CHAR_END, CharEndPositionAnalyzer(config.char_end_radius))
        self.add_analyzer(REPETITIONS, RepeatLetterAnalyzer(config.repeat_max_run))
        self.add_analyzer(ALPHABET, AlphabetAnalyzer())

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def analyzed_word_count(self) -> int:
        return self._analyzed

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    @property
    def is_self_feeding(self) -> bool:
        return self._self_feed

    @property
    def self_feed_count(self) -> int:
        return self._self_feeds

    def set_self_feed(self, enabled: bool):
        self._self_feed = bool(enabled)

    @property
    def input_filter(self) -> Translator:
        return self._input_filter

    @input_filter.setter
    def input_filter(self, translator: Translator):
        self._input_filter = translator or Translator.identity()

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def _words(self, lines: Iterable[str], delimiter: Optional[str]):
        pattern = re.compile(delimiter or self.delimiter)
        for line in lines:
            for word in pattern.split(self._input_filter.translate(line)):
                if word:
                    yield word

    def analyze_lines(self, lines: Iterable[str], delimiter: str = None, max_words: int = None) -> int:
        """
        Feed every word of lines to every analyzer.

        Args:
            lines: Text lines; each is passed through the input filter and
                split on the delimiter
            delimiter: Regex overriding the library's word delimiter
            max_words: Stop after this many words (None for no limit)

        Returns:
            Number of words analyzed by this call
        """
        with self._lock:
            start = time.perf_counter()
            self._sealed = True
            analyzers = list(self._analyzers.values())

            count = 0
            if max_words is None or max_words > 0:
                for word in self._words(lines, delimiter):
                    for analyzer in analyzers:
                        analyzer.analyze(word)
                    count += 1
                    if max_words is not None and count >= max_words:
                        break

            self._analyzed += count
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                f"Parsed {count}[{self._analyzed}] words across {len(analyzers)} modules in {elapsed_ms:.0f}ms"
            )
            return count

    def analyze(self, text: str, delimiter: str = None, max_words: int = None) -> int:
        return self.analyze_lines([text], delimiter, max_words)

    def analyze_file(self, path: Union[str, Path], delimiter: str = None,
                     max_words: int = None, encoding: str = "utf-8") -> int:
        """Analyze a text file line by line. OSError propagates to the caller."""
        with self._lock:
            with open(path, encoding=encoding) as f:
                logger.debug(f"Analyzing {path}")
                return self.analyze_lines(f, delimiter, max_words)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def run(self, script, word_count: int, separator: str = " ") -> str:
        """
        Generate word_count words with script and join them with separator.

        Each word is created with the line generated so far as its context.
        When self-feeding, the finished line is analyzed once afterwards.

        Raises:
            NothingAnalyzed: no word has been analyzed yet
        """
        if word_count < 0:
            raise ValueError("word_count cannot be negative")

        with self._lock:
            if self._analyzed == 0:
                raise NothingAnalyzed("Nothing has been analyzed")

            script.library = self
            script.on_start()
            words = []
            for _ in range(word_count):
                words.append(script.create_word(separator.join(words)))
            line = separator.join(words)
            script.on_complete(line)

            if self._self_feed:
                self._feed_back(line)
            return line

    def _feed_back(self, line: str):
        if self.max_self_feeds is not None and self._self_feeds >= self.max_self_feeds:
            logger.warning(f"Self-feed limit of {self.max_self_feeds} reached, self-feeding disabled")
            self._self_feed = False
            return
        self._self_feeds += 1
        logger.debug(f"Self-feed {self._self_feeds}: {line!r}")
        self.analyze(line)

    def clear(self):
        """Forget all analyzed data and open the library for new analyzers."""
        with self._lock:
            for analyzer in self._analyzers.values():
                analyzer.clear()
            self._analyzed = 0
            self._self_feeds = 0
            self._sealed = False
            logger.debug("Library cleared")

    def __repr__(self) -> str:
        return f"{self.analyzer_names}[{self._analyzed}]"


__all__ = [
    'Library',
    'DEFAULT_DELIMITER',
]
