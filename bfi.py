#!/usr/bin/env python3
"""
bfi — tape language interpreter CLI

Usage:
    python bfi.py <program.bf> [--strict] [--dump-tape] [-v|-vv|-q] [--log-file PATH]
    python bfi.py <program.bf> --tokens        # dump token stream and exit
    python bfi.py <program.bf> --ast           # dump parsed tree and exit

The program reads one line from stdin per ',' and writes one character
to stdout per '.', flushed immediately. Diagnostics go to stderr.

Exit status:
    0    success
    1    source unreadable, mismatched brackets, or unparseable input line
    2    internal error
    130  interrupted
"""

import argparse
import logging
import sys
import os

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from bf_interpreter import __version__
from bf_interpreter.ast_nodes import Loop, walk
from bf_interpreter.interpreter import Interpreter, InputParseError
from bf_interpreter.lexer import lex
from bf_interpreter.log_setup import setup_logging, verbosity_to_level
from bf_interpreter.parser import Parser, MismatchedBrackets
from bf_interpreter.source import load_source, SourceUnavailable

log = logging.getLogger("bf_interpreter.cli")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfi",
        description="Interpreter for the eight-instruction tape language",
    )
    parser.add_argument("source", help="Program source file")
    parser.add_argument("--strict", action="store_true",
                        help="Reject a stray top-level ']' instead of skipping it")
    parser.add_argument("--dump-tape", action="store_true",
                        help="Hex dump the tape to stderr after the run")
    parser.add_argument("--tokens", action="store_true",
                        help="Dump token stream and exit (debug)")
    parser.add_argument("--ast", action="store_true",
                        help="Dump parsed tree and exit (debug)")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase log verbosity on stderr (-v, -vv)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only log errors")
    parser.add_argument("--log-file", default=None,
                        help="Also write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"bfi {__version__}")
    return parser


def _ensure_utf8_stdout():
    """Cell values 128-255 are written as those code points; keep them encodable."""
    if sys.stdout.encoding and sys.stdout.encoding.lower() not in ('utf-8', 'utf8'):
        try:
            sys.stdout.reconfigure(encoding='utf-8', errors='replace')
        except AttributeError:
            pass  # stream without reconfigure()


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    _ensure_utf8_stdout()
    setup_logging(verbosity_to_level(args.verbose, args.quiet), args.log_file)

    try:
        source = load_source(args.source)
        log.info("Loaded %s (%d instruction character(s) after stripping)",
                 args.source, len(source))

        tokens = lex(source)
        if args.tokens:
            for tok in tokens:
                print(tok)
            return 0

        program = Parser(tokens, strict=args.strict).parse()
        if args.ast:
            _print_ast(program.body)
            return 0

        interp = Interpreter()
        tape = interp.run(program)

        if args.dump_tape:
            sys.stdout.flush()
            print(f"pointer={tape.pointer} cells={len(tape)}", file=sys.stderr)
            print(tape.hexdump(), file=sys.stderr)

    except SourceUnavailable as e:
        print(f"Source error: {e}", file=sys.stderr)
        return 1
    except MismatchedBrackets as e:
        print(f"Bracket error: {e}", file=sys.stderr)
        return 1
    except InputParseError as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Internal interpreter error: {e}", file=sys.stderr)
        log.debug("Traceback", exc_info=True)
        return 2

    return 0


def _print_ast(nodes):
    """Pretty-print a node tree (debug helper)."""
    for node, depth in walk(nodes):
        prefix = "  " * depth
        if isinstance(node, Loop):
            print(f"{prefix}Loop @{node.offset}:")
        else:
            print(f"{prefix}{node.op.name} @{node.offset}")


if __name__ == "__main__":
    sys.exit(main())
