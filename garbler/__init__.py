#!/usr/bin/env python3
"""
Garbler - Statistical Word Generator
====================================

Learns the letter statistics of a text (which letters follow which, how
long words get, how they end, which letters repeat) and generates new
words that look like they belong to it.

Quick Start
-----------
    from garbler import Library, DefaultScript

    library = Library.from_config()
    library.analyze_file("corpus.txt")

    # One line of eight words
    print(library.run(DefaultScript(), 8))

Modules
-------
    garbler.heatmap    - Online-normalized histograms, merging and sampling
    garbler.analyzers  - Statistical collectors fed by the library
    garbler.library    - Analyzer registry and word stream
    garbler.script     - Word generating scripts
    garbler.translator - Input/output character filters
    garbler.config     - Validated settings backed by configs/app.yaml

CLI Usage
---------
    python -m garbler garble -f corpus.txt -l 4
    python -m garbler info -f corpus.txt
    python -m garbler shell
"""

__version__ = "2.0.0"
__author__ = "Garbler"

# =============================================================================
# Submodule Imports
# =============================================================================

from . import heatmap
from . import analyzers

# =============================================================================
# Core Imports
# =============================================================================

from .errors import (
    GarblerError,
    InvalidConfiguration,
    InvalidSize,
    SealedLibrary,
    NothingAnalyzed,
    IndexOutOfRange,
)
from .heatmap import (
    WeightedHistogram,
    UnboundHistogram,
    KeyedHistogram,
)
from .analyzers import Analyzer, DistributionKind
from .config import LibraryConfig, GenerationConfig
from .translator import Translator, TranslatorFormatError, load_translator
from .library import Library
from .script import GarblerScript, DefaultScript, ScriptState

__all__ = [
    '__version__',
    # Submodules
    'heatmap',
    'analyzers',
    # Errors
    'GarblerError',
    'InvalidConfiguration',
    'InvalidSize',
    'SealedLibrary',
    'NothingAnalyzed',
    'IndexOutOfRange',
    # Histograms
    'WeightedHistogram',
    'UnboundHistogram',
    'KeyedHistogram',
    # Analysis pipeline
    'Analyzer',
    'DistributionKind',
    'LibraryConfig',
    'GenerationConfig',
    'Translator',
    'TranslatorFormatError',
    'load_translator',
    'Library',
    'GarblerScript',
    'DefaultScript',
    'ScriptState',
]
