#!/usr/bin/env python3
"""
Analyzers
=========
Statistical collectors a Library feeds every analyzed word to.

Registry names used by the default script:
- Influence: LetterInfluenceAnalyzer (next letter)
- CommonEndings: CommonEndingAnalyzer (word endings)
- LengthCorrelation: WordLengthCorrelationAnalyzer (length given first letter)
- WordLength: WordLengthDistributionAnalyzer (length, fallback)
- CharBegin: InitialCharDistributionAnalyzer (first letter)
- CharEnd: CharEndPositionAnalyzer (termination odds)
- Repetitions: RepeatLetterAnalyzer (letter runs)
- Alphabet: AlphabetAnalyzer (letter frequency, fallback)

Not registered by default:
- SequentialLength: SequentialWordLengthAnalyzer (length given the previous word)
"""

from .base import Analyzer, DistributionKind
from .letter_influence import LetterInfluenceAnalyzer
from .common_ending import CommonEndingAnalyzer
from .word_length import (
    SequentialWordLengthAnalyzer,
    WordLengthCorrelationAnalyzer,
    WordLengthDistributionAnalyzer,
)
from .initial_char import InitialCharDistributionAnalyzer
from .char_end import CharEndPositionAnalyzer
from .repeat_letter import RepeatLetterAnalyzer
from .alphabet import AlphabetAnalyzer

INFLUENCE = "Influence"
COMMON_ENDINGS = "CommonEndings"
LENGTH_CORRELATION = "LengthCorrelation"
WORD_LENGTH = "WordLength"
CHAR_BEGIN = "CharBegin"
CHAR_END = "CharEnd"
REPETITIONS = "Repetitions"
ALPHABET = "Alphabet"
SEQUENTIAL_LENGTH = "SequentialLength"

__all__ = [
    'Analyzer',
    'DistributionKind',
    'LetterInfluenceAnalyzer',
    'CommonEndingAnalyzer',
    'WordLengthCorrelationAnalyzer',
    'WordLengthDistributionAnalyzer',
    'SequentialWordLengthAnalyzer',
    'InitialCharDistributionAnalyzer',
    'CharEndPositionAnalyzer',
    'RepeatLetterAnalyzer',
    'AlphabetAnalyzer',
    # Registry names
    'INFLUENCE',
    'COMMON_ENDINGS',
    'LENGTH_CORRELATION',
    'WORD_LENGTH',
    'CHAR_BEGIN',
    'CHAR_END',
    'REPETITIONS',
    'ALPHABET',
    'SEQUENTIAL_LENGTH',
]
