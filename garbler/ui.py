#!/usr/bin/env python3
"""
Garbler UI
==========
Rich-based rendering for the command line and the interactive shell.

Provides:
- Library overview table (analyzers, kinds, analyzed words)
- Histogram tables with proportional bars
- Translator previews
- Generated text output

Usage:
    from garbler.ui import GarblerUI

    ui = GarblerUI()
    ui.print_library(library)
    ui.print_histogram(hist, title="Influence after 'th'")
"""

import string
from typing import Iterable, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from garbler.heatmap import KeyedHistogram, most_likely
from garbler.settings import get_setting


def _bar(value: float, peak: float, width: int) -> str:
    if peak <= 0:
        return ""
    return "█" * max(0, round(width * value / peak))


def _format_key(key) -> str:
    if isinstance(key, str):
        return repr(key)
    return str(key)


def render_library(library) -> Table:
    """Table of the registered analyzers."""
    state = "sealed" if library.is_sealed else "open"
    table = Table(
        box=box.SIMPLE,
        title=f"{library.analyzer_count} analyzers, {library.analyzed_word_count} words analyzed ({state})",
    )
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Analyzer")
    table.add_column("Kind")
    table.add_column("Description", style="dim")

    for name in library.analyzer_names:
        analyzer = library.get_analyzer(name)
        table.add_row(name, analyzer.__class__.__name__, analyzer.kind.value, analyzer.description)
    return table


def render_histogram(hist: KeyedHistogram, title: str = None,
                     max_rows: int = None, bar_width: int = None) -> Table:
    """Table of key/value pairs, strongest key highlighted."""
    max_rows = max_rows or get_setting("ui.max_rows", 40)
    bar_width = bar_width or get_setting("ui.bar_width", 30)

    table = Table(box=box.SIMPLE, title=Text(title) if title else None)
    table.add_column("Key")
    table.add_column("Value", justify="right")
    table.add_column("", min_width=bar_width)

    items = hist.items()
    peak = max((value for _, value in items), default=0.0)
    top = most_likely(hist)
    for key, value in items[:max_rows]:
        style = "bold green" if key == top else ""
        table.add_row(
            Text(_format_key(key), style=style),
            f"{value:.4f}",
            Text(_bar(value, peak, bar_width), style="cyan"),
        )

    if len(items) > max_rows:
        table.caption = f"{len(items) - max_rows} more keys not shown"
    return table


def render_translator(translator, alphabet: str = string.ascii_lowercase) -> Table:
    """Table showing what each character of alphabet becomes."""
    table = Table(box=box.SIMPLE, title=f"Translator: {translator.name}")
    table.add_column("From")
    table.add_column("To")
    for char in alphabet:
        mapped = translator.translate_char(char)
        table.add_row(char, Text(mapped, style="bold yellow" if mapped != char else "dim"))
    return table


class GarblerUI:
    """Console wrapper used by the CLI and the shell."""

    def __init__(self, quiet: bool = False, console: Console = None):
        self.quiet = quiet
        self.console = console or Console(highlight=False)

    def message(self, text: str, style: str = None):
        if not self.quiet:
            self.console.print(text, style=style, markup=False)

    def success(self, text: str):
        self.message(f"OK: {text}", style="green")

    def print_library(self, library):
        if not self.quiet:
            self.console.print(render_library(library))

    def print_histogram(self, hist: Optional[KeyedHistogram], title: str = None):
        if hist is None or hist.is_empty:
            self.message("No distribution available", style="yellow")
            return
        if not self.quiet:
            self.console.print(render_histogram(hist, title=title))

    def print_translator(self, translator):
        if not self.quiet:
            self.console.print(render_translator(translator))

    def print_lines(self, lines: Iterable[str]):
        """Generated text; printed even in quiet mode."""
        for line in lines:
            self.console.print(line, soft_wrap=True, markup=False)


__all__ = [
    'GarblerUI',
    'render_library',
    'render_histogram',
    'render_translator',
]
