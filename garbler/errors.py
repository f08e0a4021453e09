#!/usr/bin/env python3
"""
Garbler Errors
==============
Exception types raised by the histogram, analyzer and library layers.

File and translator-table problems are reported by the I/O layer with
OSError / TranslatorFormatError and are not part of this hierarchy.
"""


class GarblerError(Exception):
    """Base class for all garbler errors."""


class InvalidConfiguration(GarblerError, ValueError):
    """A radius, decay factor or threshold is outside its legal range."""


class InvalidSize(InvalidConfiguration):
    """A histogram was given an illegal size."""


class SealedLibrary(GarblerError, RuntimeError):
    """Analyzers may only be added before analysis starts."""


class NothingAnalyzed(GarblerError, RuntimeError):
    """Generation was requested before any word was analyzed."""


class IndexOutOfRange(GarblerError, IndexError):
    """A histogram index outside the current range was used."""


__all__ = [
    'GarblerError',
    'InvalidConfiguration',
    'InvalidSize',
    'SealedLibrary',
    'NothingAnalyzed',
    'IndexOutOfRange',
]
