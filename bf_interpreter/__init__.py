"""
bf_interpreter: an eight-instruction tape language interpreter
==============================================================
Reads program text, drops every non-instruction character, builds a tree
of straight-line instructions and bracketed loops, and runs it against a
growable byte tape with one data pointer.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌─────────────┐
    │  Source  │───>│  Lexer   │───>│  Parser  │───>│ Interpreter │───> stdout
    │  (text)  │    │ (tokens) │    │  (tree)  │    │   (Tape)    │<─── stdin
    └──────────┘    └──────────┘    └──────────┘    └─────────────┘

    - source.py:      file loading + whitespace stripping
    - lexer.py:       symbol filter, everything else is a comment
    - parser.py:      bracket matching, nested Loop construction
    - ast_nodes.py:   Single / Loop / Program dataclasses
    - tape.py:        bytearray cells + pointer, grows both ways
    - interpreter.py: tree walk, instruction dispatch, line-based input
"""

__version__ = "0.1.0"

from typing import Optional, TextIO

from .lexer import Lexer, Token, TokenType, lex
from .ast_nodes import ASTNode, Loop, Node, Program, Single, count_nodes, max_depth, to_source, walk
from .parser import MismatchedBrackets, ParseError, Parser
from .tape import Tape
from .interpreter import InputParseError, Interpreter, parse_input_line
from .source import SourceUnavailable, load_source, strip_whitespace


def parse_source(source: str, *, strict: bool = False) -> Program:
    """Lex and parse program text into a Program tree.

    Raises MismatchedBrackets on an unmatched '[' (or, when strict, a
    stray ']').
    """
    return Parser(lex(source), strict=strict).parse()


def run_source(source: str, *, stdin: Optional[TextIO] = None,
               stdout: Optional[TextIO] = None, tape: Optional[Tape] = None,
               strict: bool = False) -> Tape:
    """Parse and run program text; returns the final Tape.

    Parsing finishes before anything executes, so a bracket error never
    produces partial output.
    """
    program = parse_source(source, strict=strict)
    interp = Interpreter(tape=tape, stdin=stdin, stdout=stdout)
    return interp.run(program)
