"""
Bracket-matching parser for the tape interpreter.

Turns the flat token list from the Lexer into a tree of ``Single`` and
``Loop`` nodes (see ast_nodes). A single left-to-right scan keeps a
stack of loops still waiting for their ``]``: ``[`` opens a loop inside
the innermost open one, ``]`` closes it, and every other token lands in
the innermost open loop's body. The stack depth is the bracket nesting
depth, so nesting is limited only by memory, not by the call stack.

Bracket policy:
  - an unmatched ``[`` is always a MismatchedBrackets error
  - a stray top-level ``]`` is skipped with a warning, unless the parser
    is strict, in which case it is a MismatchedBrackets error too
"""

from __future__ import annotations
import logging
from typing import List, Sequence

from .lexer import Token, TokenType
from .ast_nodes import Loop, Node, Program, Single, count_nodes, max_depth

log = logging.getLogger(__name__)


class ParseError(Exception):
    def __init__(self, message: str, offset: int):
        self.offset = offset
        super().__init__(f"Parse error at token {offset}: {message}")


class MismatchedBrackets(ParseError):
    pass


class Parser:
    """Builds a Program tree from instruction tokens."""

    def __init__(self, tokens: Sequence[Token], strict: bool = False):
        self.tokens = list(tokens)
        self.strict = strict

    def parse(self) -> Program:
        """Parse the full token list into a Program."""
        body = self._parse_sequence(self.tokens)
        prog = Program(offset=0, body=body)
        if log.isEnabledFor(logging.DEBUG):
            log.debug("Parsed %d node(s), max loop depth %d",
                      count_nodes(prog), max_depth(prog))
        return prog

    # ── Helpers ─────────────────────────────

    def _parse_sequence(self, tokens: List[Token]) -> List[Node]:
        nodes: List[Node] = []
        # Loops still waiting for their ']', innermost last
        open_loops: List[Loop] = []
        for tok in tokens:
            target = open_loops[-1].body if open_loops else nodes
            if tok.type is TokenType.BEGIN_LOOP:
                loop = Loop(offset=tok.offset)
                target.append(loop)
                open_loops.append(loop)
            elif tok.type is TokenType.END_LOOP:
                if open_loops:
                    open_loops.pop()
                    continue
                if self.strict:
                    raise MismatchedBrackets("']' without matching '['", tok.offset)
                log.warning("Skipping stray ']' at token %d", tok.offset)
            else:
                target.append(Single(offset=tok.offset, op=tok.type))

        if open_loops:
            # The outermost unclosed '[' is the one whose depth never returns to 0.
            raise MismatchedBrackets("'[' without matching ']'", open_loops[0].offset)
        return nodes
