"""
AST Node definitions for the tape interpreter.

The parser produces a tree of two node kinds: a ``Single`` leaf wrapping
one non-bracket instruction, and a ``Loop`` owning the nodes of its body.
Brackets themselves never survive as leaves.

Nodes compare structurally; source offsets are carried for diagnostics
only and are excluded from equality.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Tuple, Union

from .lexer import TokenType


# ──────────────────────────────────────────────
# Base AST node
# ──────────────────────────────────────────────

@dataclass
class ASTNode:
    """Base class for all AST nodes."""
    offset: int = field(default=0, compare=False)


# ──────────────────────────────────────────────
# Leaves and loops
# ──────────────────────────────────────────────

@dataclass
class Single(ASTNode):
    """One straight-line instruction (never a bracket)."""
    op: TokenType = TokenType.INCREMENT

    def __post_init__(self):
        if self.op.is_bracket:
            raise ValueError(f"Bracket {self.op.value!r} cannot be a leaf")


@dataclass
class Loop(ASTNode):
    """A bracketed loop; ``body`` runs while the current cell is non-zero."""
    body: List[Node] = field(default_factory=list)


Node = Union[Single, Loop]


# ──────────────────────────────────────────────
# Top-level: Program
# ──────────────────────────────────────────────

@dataclass
class Program(ASTNode):
    """Root node: the ordered top-level sequence."""
    body: List[Node] = field(default_factory=list)

    def __iter__(self):
        return iter(self.body)

    def __len__(self):
        return len(self.body)


# ──────────────────────────────────────────────
# Tree utilities
# ──────────────────────────────────────────────

# Walkers keep an explicit stack so nesting depth is not bounded by
# the interpreter's recursion limit.

def walk(nodes: Iterable[Node]) -> Iterator[Tuple[Node, int]]:
    """Yield ``(node, depth)`` in source order; top-level nodes have depth 0."""
    stack = [iter(nodes)]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
            continue
        yield node, len(stack) - 1
        if isinstance(node, Loop):
            stack.append(iter(node.body))


def to_source(nodes: Iterable[Node]) -> str:
    """Serialize a node sequence back to instruction text."""
    parts: List[str] = []
    depth = 0
    for node, node_depth in walk(nodes):
        # Close every loop the walk has left since the previous node.
        parts.append(TokenType.END_LOOP.value * (depth - node_depth))
        depth = node_depth
        if isinstance(node, Loop):
            parts.append(TokenType.BEGIN_LOOP.value)
            depth += 1
        else:
            parts.append(node.op.value)
    parts.append(TokenType.END_LOOP.value * depth)
    return "".join(parts)


def count_nodes(nodes: Iterable[Node]) -> int:
    return sum(1 for _ in walk(nodes))


def max_depth(nodes: Iterable[Node]) -> int:
    """Deepest loop nesting level (0 for straight-line code)."""
    return max((depth + 1 for node, depth in walk(nodes) if isinstance(node, Loop)),
               default=0)
