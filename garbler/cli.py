#!/usr/bin/env python3
"""
Garbler CLI
===========
Command-line interface for analyzing text and generating garbled words.

Usage:
    garbler garble -f corpus.txt -l 4 -w 8
    garbler garble -t "some text to learn from" --seed 7
    garbler info -f corpus.txt
    garbler inspect Influence th -f corpus.txt
    garbler filter vowels.gtf
    garbler shell
"""

import argparse
import logging
import random
import sys

from garbler import __version__

# =============================================================================
# Constants
# =============================================================================

FILTERS = ['case', 'none']

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# =============================================================================
# Utilities
# =============================================================================


class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        from garbler.ui import GarblerUI
        self.quiet = quiet
        self.ui = GarblerUI(quiet=quiet)

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def success(self, msg: str):
        if not self.quiet:
            print(f"OK: {msg}")


def configure_logging(verbose: bool = False):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def make_translator(name: str = None, path: str = None):
    """Translator from a --filter name and/or a --filter-file path."""
    from garbler.translator import Translator, load_translator

    translator = Translator.case_insensitive() if name == 'case' else Translator.identity()
    if path:
        translator = translator.compose(load_translator(path))
    return translator


def build_library(args):
    """Library with the default analyzers, configured from app.yaml and args."""
    from garbler.config import LibraryConfig
    from garbler.library import Library

    config = LibraryConfig(
        influence_radius=getattr(args, 'liradius', None),
        influence_factor=getattr(args, 'lifactor', None),
        ending_radius=getattr(args, 'ceradius', None),
        delimiter=getattr(args, 'delimiter', None),
        input_filter=getattr(args, 'filter', None),
    )
    library = Library.from_config(config)
    if getattr(args, 'filter_file', None):
        library.input_filter = make_translator(config.input_filter, args.filter_file)
    return library


def feed(library, args, out: Output, required: bool = True) -> int:
    """Analyze every -f file and -t text; returns the number of words."""
    files = getattr(args, 'file', None) or []
    texts = getattr(args, 'text', None) or []
    if required and not files and not texts:
        raise ValueError("Nothing to analyze: use -f FILE or -t TEXT")

    total = 0
    for path in files:
        count = library.analyze_file(path, max_words=args.count)
        out.success(f"Parsed {count} words from {path}")
        total += count
    for text in texts:
        total += library.analyze(text, max_words=args.count)
    return total


def add_feed_arguments(p: argparse.ArgumentParser):
    p.add_argument('-f', '--file', action='append', help='Text file to analyze (repeatable)')
    p.add_argument('-t', '--text', action='append', help='Text to analyze (repeatable)')
    p.add_argument('-d', '--delimiter', help='Word delimiter regex')
    p.add_argument('-c', '--count', type=int, help='Max words to analyze per source')
    p.add_argument('--filter', choices=FILTERS, help='Input filter (default: from app.yaml)')
    p.add_argument('--filter-file', help='Translator file applied to input')
    p.add_argument('--liradius', type=int, help='Letter influence radius')
    p.add_argument('--lifactor', type=float, help='Letter influence decay factor')
    p.add_argument('--ceradius', type=int, help='Common endings radius')


# =============================================================================
# Commands
# =============================================================================

def cmd_garble(args, out: Output):
    """Analyze input and print generated lines."""
    from garbler.config import GenerationConfig
    from garbler.script import DefaultScript

    library = build_library(args)
    feed(library, args, out)
    if args.self_feed:
        library.set_self_feed(True)

    config = GenerationConfig(
        words_per_line=args.words,
        separator=args.separator,
    )
    script = DefaultScript(
        config=config,
        output_filter=make_translator(args.out_filter, args.out_filter_file),
        rng=random.Random(args.seed),
    )

    lines = []
    for _ in range(args.lines):
        line = library.run(script, config.words_per_line, config.separator)
        if args.timing:
            line = f"[{script.elapsed_ms:.0f}ms] {line}"
        lines.append(line)

    out.ui.print_lines(lines)
    return 0


def cmd_info(args, out: Output):
    """Show the analyzers and how much they have seen."""
    library = build_library(args)
    feed(library, args, out, required=False)
    out.ui.print_library(library)
    return 0


def cmd_inspect(args, out: Output):
    """Show one analyzer's distribution for a prefix."""
    library = build_library(args)
    feed(library, args, out)

    analyzer = library.get_analyzer(args.analyzer)
    if analyzer is None:
        out.error(f"Unknown analyzer '{args.analyzer}' (known: {', '.join(library.analyzer_names)})")
        return 1

    hist = analyzer.query(args.context, args.prefix)
    out.ui.print_histogram(hist, title=f"{args.analyzer.upper()} after {args.prefix!r}")
    return 0


def cmd_filter(args, out: Output):
    """Preview a translator file."""
    from garbler.translator import load_translator

    translator = load_translator(args.path)
    if args.alphabet:
        out.ui.print_lines([translator.translate(args.alphabet)])
    else:
        out.ui.print_translator(translator)
    return 0


def cmd_shell(args, out: Output):
    """Start the interactive shell."""
    from garbler.shell import GarblerShell

    shell = GarblerShell(ui=out.ui, rng=random.Random(args.seed))
    if args.init is not None:
        shell.execute(f"init {args.init}")
    return shell.run()


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='garbler',
        description='Garbler - generate words that look like your text',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s garble -f corpus.txt -l 4 -w 8
  %(prog)s garble -t "lorem ipsum dolor sit amet" --seed 7
  %(prog)s info -f corpus.txt
  %(prog)s inspect CharEnd e -f corpus.txt
  %(prog)s filter vowels.gtf
  %(prog)s shell
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging and tracebacks')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- garble ---
    p = subparsers.add_parser('garble', aliases=['g'], help='Analyze input and generate words')
    add_feed_arguments(p)
    p.add_argument('-l', '--lines', type=int, default=1, help='Lines to generate (default: 1)')
    p.add_argument('-w', '--words', type=int, help='Words per line (default: from app.yaml)')
    p.add_argument('-s', '--separator', help='Word separator (default: from app.yaml)')
    p.add_argument('--out-filter', choices=FILTERS, help='Output filter')
    p.add_argument('--out-filter-file', help='Translator file applied to output')
    p.add_argument('--self-feed', action='store_true', help='Analyze every generated line again')
    p.add_argument('--seed', type=int, help='Random seed for repeatable output')
    p.add_argument('--timing', action='store_true', help='Prefix lines with generation time')

    # --- info ---
    p = subparsers.add_parser('info', aliases=['i'], help='Show analyzers')
    add_feed_arguments(p)

    # --- inspect ---
    p = subparsers.add_parser('inspect', aliases=['show'], help="Show an analyzer's distribution")
    p.add_argument('analyzer', help='Analyzer name (e.g. Influence, CharEnd)')
    p.add_argument('prefix', nargs='?', default='', help='Word prefix to query with')
    p.add_argument('--context', default='', help='Line context passed to the analyzer')
    add_feed_arguments(p)

    # --- filter ---
    p = subparsers.add_parser('filter', help='Preview a translator file')
    p.add_argument('path', help='Translator file')
    p.add_argument('--alphabet', '-a', help='Translate this text instead of showing a table')

    # --- shell ---
    p = subparsers.add_parser('shell', aliases=['sh'], help='Interactive shell')
    p.add_argument('--init', '-i', metavar='ARGS', help='Run "init ARGS" on start (e.g. "-default")')
    p.add_argument('--seed', type=int, help='Random seed for repeatable output')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.verbose)

    # Handle aliases
    cmd_map = {
        'g': 'garble',
        'i': 'info',
        'show': 'inspect',
        'sh': 'shell',
    }
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    # Dispatch
    commands = {
        'garble': cmd_garble,
        'info': cmd_info,
        'inspect': cmd_inspect,
        'filter': cmd_filter,
        'shell': cmd_shell,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except Exception as e:
            out.error(str(e))
            if args.verbose:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
