#!/usr/bin/env python3
"""
Configuration
=============
Validated settings for building a library and running the default script.

Any field left as None is filled from configs/app.yaml, so callers only
pass what they want to override:

    config = LibraryConfig(influence_radius=4)
    library = Library.from_config(config)
"""

from dataclasses import dataclass, fields
from typing import Optional

from garbler.errors import InvalidConfiguration
from garbler.settings import get_setting


def _fill(instance, section: str, mapping: dict):
    """Fill None fields from the given app.yaml section and report gaps."""
    cfg = get_setting(section, {}) or {}
    for attr, key in mapping.items():
        if getattr(instance, attr) is None:
            setattr(instance, attr, cfg.get(key))


def _missing(instance, optional=()) -> list:
    return [
        f.name for f in fields(instance)
        if getattr(instance, f.name) is None and f.name not in optional
    ]


@dataclass
class LibraryConfig:
    """Analyzer parameters and library behavior."""
    influence_radius: Optional[int] = None      # Letters that influence the next one
    influence_factor: Optional[float] = None    # Decay per letter of distance
    ending_min_radius: Optional[int] = None     # Shortest shared ending
    ending_radius: Optional[int] = None         # Longest stored ending
    char_end_radius: Optional[int] = None       # Distance-from-end cap
    repeat_max_run: Optional[int] = None        # Longest tracked letter run
    delimiter: Optional[str] = None
    input_filter: Optional[str] = None          # "case" or "none"
    self_feed: Optional[bool] = None
    max_self_feeds: Optional[int] = None        # None: no cap

    def __post_init__(self):
        _fill(self, "analyzers.letter_influence", {
            "influence_radius": "radius",
            "influence_factor": "factor",
        })
        _fill(self, "analyzers.common_endings", {
            "ending_min_radius": "min_radius",
            "ending_radius": "max_radius",
        })
        _fill(self, "analyzers.char_end", {"char_end_radius": "radius"})
        _fill(self, "analyzers.repeat_letter", {"repeat_max_run": "max_run"})
        _fill(self, "library", {
            "delimiter": "delimiter",
            "input_filter": "input_filter",
            "self_feed": "self_feed",
            "max_self_feeds": "max_self_feeds",
        })

        missing = _missing(self, optional=("max_self_feeds",))
        if missing:
            raise InvalidConfiguration(f"library settings missing in app.yaml: {', '.join(missing)}")
        self.validate()

    def validate(self):
        if self.influence_radius < 1:
            raise InvalidConfiguration("Letter influence radius must be greater than 0")
        if not 0 < self.influence_factor <= 1:
            raise InvalidConfiguration("Letter influence factor must be in (0, 1]")
        if self.ending_min_radius < 1:
            raise InvalidConfiguration("Common ending min radius must be greater than 0")
        if self.ending_radius < self.ending_min_radius:
            raise InvalidConfiguration("Common ending radius must be at least its min radius")
        if self.char_end_radius < 1:
            raise InvalidConfiguration("Char end radius must be greater than 0")
        if self.repeat_max_run < 2:
            raise InvalidConfiguration("Repeat letter max run must be at least 2")
        if self.input_filter not in ("case", "none"):
            raise InvalidConfiguration(f"Unknown input filter '{self.input_filter}'")
        if self.max_self_feeds is not None and self.max_self_feeds < 0:
            raise InvalidConfiguration("max_self_feeds cannot be negative")


@dataclass
class GenerationConfig:
    """Knobs of the default generating script."""
    length_trim: Optional[float] = None
    ending_padding: Optional[int] = None
    repeat_threshold: Optional[float] = None
    end_threshold: Optional[float] = None
    words_per_line: Optional[int] = None
    separator: Optional[str] = None

    def __post_init__(self):
        _fill(self, "generation", {f.name: f.name for f in fields(self)})

        missing = _missing(self)
        if missing:
            raise InvalidConfiguration(f"generation settings missing in app.yaml: {', '.join(missing)}")

        if not 0 <= self.length_trim < 1:
            raise InvalidConfiguration("length_trim must be in [0, 1)")
        if self.ending_padding < 0:
            raise InvalidConfiguration("ending_padding cannot be negative")
        for name in ("repeat_threshold", "end_threshold"):
            if not 0 <= getattr(self, name) <= 1:
                raise InvalidConfiguration(f"{name} must be in [0, 1]")
        if self.words_per_line < 1:
            raise InvalidConfiguration("words_per_line must be at least 1")


__all__ = [
    'LibraryConfig',
    'GenerationConfig',
]
