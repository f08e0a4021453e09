#!/usr/bin/env python3
"""
Garbler Shell
=============
Line-oriented interactive shell around a Library.

    > init -liradius 4
    > feed -f corpus.txt -c 5000
    > filter -o -f vowels.gtf
    > garble 3 6
    > show Influence th
    > quit

Commands are case-insensitive; arguments are split like a POSIX shell, so
quoted text stays in one piece (feed -t "some words"). Mistakes print a
hint and never end the session.
"""

import logging
import random
import re
import shlex
from typing import Dict, Iterable, List, Optional, Tuple

from garbler.config import GenerationConfig, LibraryConfig
from garbler.errors import GarblerError
from garbler.library import Library
from garbler.script import DefaultScript
from garbler.translator import Translator, load_translator
from garbler.ui import GarblerUI

logger = logging.getLogger(__name__)

PROMPT = "> "

# command -> (description, usage)
HELP: Dict[str, Tuple[str, str]] = {
    "help": (
        "Displays information about a specific command.",
        "help <command>",
    ),
    "init": (
        "Creates a new library with the default analyzers.",
        "init [-default | [-liradius <int>] [-lifactor <float>] [-ceradius <int>]]\n"
        "  -default : use the configured defaults\n"
        "  -liradius <int> : letter influence radius\n"
        "  -lifactor <float> : letter influence decay factor\n"
        "  -ceradius <int> : common endings radius",
    ),
    "info": (
        "Displays the analyzers and how many words they have seen.",
        "info",
    ),
    "clear": (
        "Drops all analyzed data and resets the output filter. Alias: dump.",
        "clear",
    ),
    "feed": (
        "Analyzes a file or a piece of text.",
        "feed <-f <file> | -t <text>> [-c <count> | -C] [-d <delim>]\n"
        "  -f <file> : analyze the contents of a file\n"
        "  -t <text> : analyze a text string\n"
        "  -c <count> : analyze at most count words\n"
        "  -C : analyze as many words as the previous feed did\n"
        "  -d <delim> : regex to split words with",
    ),
    "filter": (
        "Sets the input and/or output translator.",
        "filter <-i | -o | -io> <-c | -w | -f <file>>\n"
        "  -i / -o / -io : set the input, output, or both filters\n"
        "  -c : no filtering\n"
        "  -w : case-insensitive filtering\n"
        "  -f <file> : translator file, lines of the form q,p,b=d",
    ),
    "config": (
        "Changes library settings.",
        "config -sf <on | off>\n"
        "  -sf : analyze every generated line again (self-feeding)",
    ),
    "garble": (
        "Generates lines of words.",
        "garble <lines> [<words>] [-s <separator>] [-w | -o]\n"
        "  -s <separator> : text between words (default: a space)\n"
        "  -w : case-insensitive output for this call\n"
        "  -o : use the output filter set with 'filter -o' (default)",
    ),
    "show": (
        "Shows an analyzer's distribution for a word prefix.",
        "show <analyzer> [<prefix>]",
    ),
    "quit": (
        "Leaves the shell. Alias: exit.",
        "quit",
    ),
}

ALIASES = {"dump": "clear", "exit": "quit"}

ON_VALUES = ("on", "true", "1")
OFF_VALUES = ("off", "false", "0")


class UsageError(Exception):
    """A command was called with arguments it cannot use."""


class GarblerShell:
    """Interactive command loop."""

    def __init__(self, ui: GarblerUI = None, rng: random.Random = None):
        self.ui = ui or GarblerUI()
        self.rng = rng or random.Random()
        self.library: Optional[Library] = None
        self.output_filter = Translator.identity()
        self.last_count: Optional[int] = None
        self.running = True

        self._handlers = {
            "help": self.do_help,
            "init": self.do_init,
            "info": self.do_info,
            "clear": self.do_clear,
            "feed": self.do_feed,
            "filter": self.do_filter,
            "config": self.do_config,
            "garble": self.do_garble,
            "show": self.do_show,
            "quit": self.do_quit,
        }

    # -------------------------------------------------------------------------
    # Loop
    # -------------------------------------------------------------------------

    def run(self, lines: Iterable[str] = None) -> int:
        """Execute lines (or read from stdin) until quit; returns an exit code."""
        if lines is not None:
            for line in lines:
                if not self.execute(line):
                    break
            return 0

        self.ui.message("Garbler shell. Type 'help <command>' for help, 'quit' to leave.")
        while self.running:
            try:
                line = input(PROMPT)
            except EOFError:
                break
            except KeyboardInterrupt:
                self.ui.message("")
                break
            self.execute(line)
        return 0

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False once the shell should stop."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.ui.message(f"Could not parse command: {e}", style="red")
            return self.running
        if not parts:
            return self.running

        command = parts[0].lower()
        command = ALIASES.get(command, command)
        handler = self._handlers.get(command)
        if handler is None:
            self.ui.message(f"Unrecognized command '{parts[0]}'. Type 'help' for a list of commands.")
            return self.running

        try:
            handler(parts[1:])
        except UsageError as e:
            if str(e):
                self.ui.message(str(e), style="red")
            self.ui.message(f"Invalid command usage. See 'help {command}' for more information.")
        except (GarblerError, OSError, ValueError, re.error) as e:
            logger.debug(f"{command} failed", exc_info=True)
            self.ui.message(f"Error: {e}", style="red")
        return self.running

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_library(self) -> Library:
        if self.library is None:
            raise UsageError("Uninitialized library. Run 'init' first.")
        return self.library

    @staticmethod
    def _value(args: List[str], index: int, convert=str):
        if index >= len(args):
            raise UsageError(f"Missing value for {args[index - 1]}")
        try:
            return convert(args[index])
        except ValueError:
            raise UsageError(f"Bad value for {args[index - 1]}: '{args[index]}'") from None

    def _translator(self, mode: str, args: List[str]) -> Translator:
        if mode == "-c":
            return Translator.identity()
        if mode == "-w":
            return Translator.case_insensitive()
        if mode == "-f":
            return load_translator(self._value(args, 2))
        raise UsageError(f"Unknown filter mode '{mode}'")

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def do_help(self, args: List[str]):
        if not args:
            self.ui.message("Commands: " + ", ".join(sorted(HELP)))
            self.ui.message("Type 'help <command>' for details.")
            return

        name = ALIASES.get(args[0].lower(), args[0].lower())
        if name not in HELP:
            self.ui.message(f"No information found on '{args[0]}'")
            return
        description, usage = HELP[name]
        self.ui.message(name.upper(), style="bold")
        self.ui.message(description)
        self.ui.message("")
        self.ui.message("Usage:")
        self.ui.message("  " + usage.replace("\n", "\n  "))

    def do_init(self, args: List[str]):
        overrides = {}
        i = 0
        while i < len(args):
            arg = args[i].lower()
            if arg == "-default":
                overrides = {}
            elif arg == "-liradius":
                i += 1
                overrides["influence_radius"] = self._value(args, i, int)
            elif arg == "-lifactor":
                i += 1
                overrides["influence_factor"] = self._value(args, i, float)
            elif arg == "-ceradius":
                i += 1
                overrides["ending_radius"] = self._value(args, i, int)
            else:
                raise UsageError(f"Unknown option '{args[i]}'")
            i += 1

        config = LibraryConfig(**overrides)
        self.library = Library.from_config(config)
        self.output_filter = Translator.identity()
        self.last_count = None
        self.ui.success(
            f"Loaded {self.library.analyzer_count} modules "
            f"[{config.influence_radius}:{config.influence_factor}:{config.ending_radius}]"
        )

    def do_info(self, args: List[str]):
        library = self._require_library()
        self.ui.print_library(library)
        self.ui.message(f"  self-feeding  {'on' if library.is_self_feeding else 'off'}")
        self.ui.message(f"  input filter  {library.input_filter.name}")
        self.ui.message(f"  output filter {self.output_filter.name}")

    def do_clear(self, args: List[str]):
        library = self._require_library()
        library.clear()
        self.output_filter = Translator.identity()
        self.ui.success("Emptied library contents")

    def do_feed(self, args: List[str]):
        library = self._require_library()
        source = None
        is_file = False
        delimiter = None
        count = None

        i = 0
        while i < len(args):
            arg = args[i]
            if arg in ("-f", "-t"):
                i += 1
                source = self._value(args, i)
                is_file = arg == "-f"
            elif arg == "-d":
                i += 1
                delimiter = self._value(args, i)
            elif arg == "-c":
                i += 1
                count = self._value(args, i, int)
                if count < 0:
                    raise UsageError("Count cannot be negative")
            elif arg == "-C":
                count = self.last_count
            else:
                raise UsageError(f"Unknown option '{arg}'")
            i += 1

        if not source:
            raise UsageError("Nothing to feed")

        if is_file:
            analyzed = library.analyze_file(source, delimiter=delimiter, max_words=count)
        else:
            analyzed = library.analyze(source, delimiter=delimiter, max_words=count)
        self.last_count = analyzed
        self.ui.message(f"Parsed {analyzed}[{library.analyzed_word_count}] words")

    def do_filter(self, args: List[str]):
        library = self._require_library()
        if len(args) < 2:
            raise UsageError("")

        direction = args[0].lower()
        if direction not in ("-i", "-o", "-io", "-oi"):
            raise UsageError(f"Unknown filter direction '{args[0]}'")
        translator = self._translator(args[1], args)

        if "i" in direction:
            library.input_filter = translator
        if "o" in direction:
            self.output_filter = translator
        target = {"-i": "input", "-o": "output"}.get(direction, "input and output")
        self.ui.message(f"Set {target} filter")
        self.ui.message(translator.translate("abcdefghijklmnopqrstuvwxyz"))

    def do_config(self, args: List[str]):
        library = self._require_library()
        if len(args) < 2 or args[0].lower() != "-sf":
            raise UsageError("")

        value = args[1].lower()
        if value in ON_VALUES:
            library.set_self_feed(True)
        elif value in OFF_VALUES:
            library.set_self_feed(False)
        else:
            raise UsageError(f"Expected on or off, got '{args[1]}'")
        self.ui.message(f"Self feeding {'on' if library.is_self_feeding else 'off'}")

    def do_garble(self, args: List[str]):
        library = self._require_library()
        if library.analyzed_word_count == 0:
            self.ui.message("Nothing has been analyzed yet.")
            return
        if not args:
            raise UsageError("")

        if not args[0].isdigit():
            raise UsageError(f"Expected a number of lines, got '{args[0]}'")
        lines = int(args[0])
        config = GenerationConfig()
        words = config.words_per_line
        separator = config.separator
        output_filter = self.output_filter

        i = 1
        if len(args) > 1 and args[1].isdigit():
            words = int(args[1])
            i = 2
        while i < len(args):
            arg = args[i]
            if arg == "-s":
                i += 1
                separator = self._value(args, i)
            elif arg == "-w":
                output_filter = Translator.case_insensitive()
            elif arg == "-o":
                output_filter = self.output_filter
            else:
                raise UsageError(f"Unknown option '{arg}'")
            i += 1

        if lines < 0 or words < 0:
            raise UsageError("Counts cannot be negative")

        script = DefaultScript(config=config, output_filter=output_filter, rng=self.rng)
        for _ in range(lines):
            line = library.run(script, words, separator)
            self.ui.print_lines([f"[{script.elapsed_ms:.0f}ms] {line}"])

    def do_show(self, args: List[str]):
        library = self._require_library()
        if not args:
            raise UsageError("")

        analyzer = library.get_analyzer(args[0])
        if analyzer is None:
            self.ui.message(f"Unknown analyzer '{args[0]}'. Known: {', '.join(library.analyzer_names)}")
            return
        prefix = args[1] if len(args) > 1 else ""
        self.ui.print_histogram(analyzer.query("", prefix), title=f"{args[0].upper()} after {prefix!r}")

    def do_quit(self, args: List[str]):
        self.running = False


__all__ = [
    'GarblerShell',
    'HELP',
]
