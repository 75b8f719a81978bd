"""
Tree-walking interpreter for the tape language.

Executes a parsed Program against a single live Tape. Loop bodies run
against that same tape and pointer, so every pass sees the effects of
the previous one and the loop test always reads the live cell.

I/O model:
  - ``,`` blocks for one line from the input stream (see parse_input_line)
  - ``.`` writes one character to the output stream and flushes at once,
    so output is visible before the next blocking read
"""

from __future__ import annotations
import logging
import re
import sys
from typing import Callable, Dict, Iterable, Optional, TextIO

from .lexer import TokenType
from .ast_nodes import Loop, Node
from .tape import Tape

log = logging.getLogger(__name__)

# Optional '+' then ASCII digits only; int() alone would also take '_', '-' and non-ASCII digits.
_BYTE_LITERAL = re.compile(r'\+?[0-9]+')


class InputParseError(Exception):
    def __init__(self, line: str):
        self.line = line
        super().__init__(f"Could not parse input line {line!r}: "
                         f"expected an integer 0-255 or at least one character")


def parse_input_line(line: str) -> int:
    """Decode one input line into a cell value.

    The trimmed line is taken as a decimal byte (0-255) when it is one;
    otherwise its first character supplies the value, truncated to 8 bits.
    An empty trimmed line raises InputParseError.
    """
    text = line.strip()
    if _BYTE_LITERAL.fullmatch(text):
        # Drop leading zeros first so arbitrarily long lines never reach int().
        digits = text.lstrip('+').lstrip('0')
        if len(digits) <= 3 and int(digits or '0') <= 0xFF:
            return int(digits or '0')
    if not text:
        raise InputParseError(line)
    return ord(text[0]) & 0xFF


class Interpreter:
    """Runs Program trees against one Tape.

    Usage:
        interp = Interpreter(stdin=io.StringIO("65\\n"), stdout=buf)
        interp.run(parse_source(",."))
        interp.tape.current  # 65
    """

    def __init__(self, tape: Optional[Tape] = None,
                 stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None):
        self.tape = tape if tape is not None else Tape()
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

        # Leaf instructions executed so far (loop tests are not counted)
        self.steps = 0

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def run(self, program: Iterable[Node]) -> Tape:
        """Execute a whole program and return the final tape."""
        log.info("Run started")
        self.execute(program)
        log.info("Run finished after %d instruction(s); tape %d cell(s), pointer %d",
                 self.steps, len(self.tape), self.tape.pointer)
        return self.tape

    def execute(self, nodes: Iterable[Node]):
        """Execute each node in order against the live tape.

        Loops are tracked on an explicit frame stack of (loop, body
        iterator) rather than by recursion, so nesting depth is bounded
        only by memory. When a body iterator runs out the loop re-tests
        the live cell: non-zero starts another pass, zero pops the frame.
        """
        frames = [(None, iter(nodes))]
        while frames:
            loop, body = frames[-1]
            node = next(body, None)
            if node is None:
                if loop is not None and self.tape.current != 0:
                    frames[-1] = (loop, iter(loop.body))
                else:
                    frames.pop()
                continue

            if isinstance(node, Loop):
                log.debug("Loop at token %d entered with cell %d", node.offset, self.tape.current)
                if self.tape.current != 0:
                    frames.append((node, iter(node.body)))
            else:
                self._dispatch[node.op]()
                self.steps += 1

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════

    def _build_dispatch(self) -> Dict[TokenType, Callable[[], None]]:
        return {
            TokenType.INCREMENT:   self._op_increment,
            TokenType.DECREMENT:   self._op_decrement,
            TokenType.SHIFT_LEFT:  self._op_shift_left,
            TokenType.SHIFT_RIGHT: self._op_shift_right,
            TokenType.INPUT:       self._op_input,
            TokenType.OUTPUT:      self._op_output,
        }

    def _op_increment(self):
        self.tape.increment()

    def _op_decrement(self):
        self.tape.decrement()

    def _op_shift_left(self):
        self.tape.move_left()

    def _op_shift_right(self):
        self.tape.move_right()

    def _op_input(self):
        line = self.stdin.readline()
        self.tape.set_current(parse_input_line(line))

    def _op_output(self):
        self.stdout.write(chr(self.tape.current))
        self.stdout.flush()
