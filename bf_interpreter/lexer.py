"""
Lexer / Tokenizer for the tape interpreter.

Filters program text down to the eight instruction symbols. Every other
character is a comment and is dropped without complaint, so this stage
never fails.

Token offsets count positions in the *filtered* instruction stream, not
in the raw text: the parser reports bracket errors against them.
"""

from __future__ import annotations
import enum
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List

log = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Token types
# ──────────────────────────────────────────────

class TokenType(enum.Enum):
    INCREMENT = "+"
    DECREMENT = "-"
    SHIFT_LEFT = "<"
    SHIFT_RIGHT = ">"
    INPUT = ","
    OUTPUT = "."
    BEGIN_LOOP = "["
    END_LOOP = "]"

    @property
    def is_bracket(self) -> bool:
        return self in (TokenType.BEGIN_LOOP, TokenType.END_LOOP)


# ──────────────────────────────────────────────
# Token data class
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Token:
    type: TokenType
    offset: int = 0

    def __repr__(self):
        return f"Token({self.type.name}, {self.type.value!r}, @{self.offset})"


SYMBOLS: Dict[str, TokenType] = {t.value: t for t in TokenType}


# ──────────────────────────────────────────────
# Lexer
# ──────────────────────────────────────────────

class Lexer:
    """Tokenizes program text into a list of instruction Tokens."""

    def __init__(self, source: str):
        self.source = source
        self.tokens: List[Token] = []

    def __iter__(self) -> Iterator[Token]:
        offset = 0
        for ch in self.source:
            ttype = SYMBOLS.get(ch)
            if ttype is None:
                continue
            yield Token(ttype, offset)
            offset += 1

    def tokenize(self) -> List[Token]:
        self.tokens = list(self)
        log.debug("Lexed %d instruction(s) from %d character(s)",
                  len(self.tokens), len(self.source))
        return self.tokens


def lex(source: str) -> List[Token]:
    """Shorthand for ``Lexer(source).tokenize()``."""
    return Lexer(source).tokenize()
