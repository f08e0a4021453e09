#!/usr/bin/env python3
"""
Translators
===========
Character-to-character mappings applied to text before it is analyzed
(input filter) and to every generated word (output filter).

A translator never changes the length of a string: each character maps to
exactly one character.

Translator files hold one mapping per line, keys separated by single
characters and the value after '=':

    a,e,i,o,u=*
    x=k

Usage:
    lower = Translator.case_insensitive()
    vowels = load_translator("vowels.gtf")
    (lower.compose(vowels)).translate("Hello")   # "h*ll*"
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Mapping, Tuple, Union

logger = logging.getLogger(__name__)

CharStep = Callable[[str], str]


class TranslatorFormatError(ValueError):
    """A translator file line could not be parsed."""

    def __init__(self, message: str, line_number: int = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


def _lower_char(char: str) -> str:
    lowered = char.lower()
    # Some letters expand when lowered (e.g. 'İ'); keep those as they are
    return lowered if len(lowered) == 1 else char


class Translator:
    """An ordered chain of per-character mappings."""

    def __init__(self, steps: Tuple[CharStep, ...] = (), name: str = "none"):
        self._steps = tuple(steps)
        self.name = name

    @classmethod
    def identity(cls) -> 'Translator':
        return cls((), name="none")

    @classmethod
    def case_insensitive(cls) -> 'Translator':
        return cls((_lower_char,), name="case")

    @classmethod
    def from_map(cls, mapping: Mapping[str, str], name: str = "map") -> 'Translator':
        """Table lookup; characters missing from the table pass through."""
        table: Dict[str, str] = {}
        for key, value in mapping.items():
            if len(key) != 1 or len(value) != 1:
                raise ValueError(f"Translator entries must map one character to one character: {key!r}={value!r}")
            table[key] = value
        return cls((lambda char: table.get(char, char),), name=name)

    def compose(self, other: 'Translator') -> 'Translator':
        """Translator applying self first, then other."""
        return Translator(self._steps + other._steps, name=f"{self.name}+{other.name}")

    @property
    def is_identity(self) -> bool:
        return not self._steps

    def translate_char(self, char: str) -> str:
        for step in self._steps:
            char = step(char)
        return char

    def translate(self, text: str) -> str:
        if not self._steps:
            return text
        return ''.join(self.translate_char(char) for char in text)

    __call__ = translate

    def __repr__(self) -> str:
        return f"Translator({self.name})"


def parse_translator(lines, name: str = "file") -> Translator:
    """Build a translator from translator-file lines."""
    table: Dict[str, str] = {}
    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip('\r\n')
        if not line:
            continue

        index = line.find('=')
        if index < 0:
            raise TranslatorFormatError("missing '='", line_number)
        if len(line) != index + 2:
            raise TranslatorFormatError("expected exactly one character after '='", line_number)

        value = line[index + 1]
        for key in line[:index:2]:
            table[key] = value

    return Translator.from_map(table, name=name)


def load_translator(path: Union[str, Path], encoding: str = "utf-8") -> Translator:
    """Read a translator file. Raises OSError or TranslatorFormatError."""
    path = Path(path)
    with open(path, encoding=encoding) as f:
        translator = parse_translator(f, name=path.name)
    logger.debug(f"Loaded translator {path}")
    return translator


__all__ = [
    'Translator',
    'TranslatorFormatError',
    'parse_translator',
    'load_translator',
]
