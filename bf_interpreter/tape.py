"""
Growable byte tape with a single data pointer.

The tape starts as one zero cell and grows on demand in either
direction; it never shrinks. Cell arithmetic wraps modulo 256.

Growing to the left inserts a new cell at index 0 and keeps the pointer
at 0, so every existing cell shifts one place right.
"""

from typing import Iterable, Optional


class Tape:
    """Byte cells (bytearray) plus the data pointer.

    Invariant: ``0 <= pointer < len(cells)`` after every operation.
    """

    def __init__(self, cells: Optional[Iterable[int]] = None, pointer: int = 0):
        self.cells = bytearray(cells) if cells is not None else bytearray(1)
        if not self.cells:
            self.cells.append(0)
        if not 0 <= pointer < len(self.cells):
            raise ValueError(f"Pointer {pointer} outside tape of {len(self.cells)} cell(s)")
        self.pointer = pointer

    def __len__(self) -> int:
        return len(self.cells)

    def __repr__(self):
        return f"Tape(len={len(self.cells)}, pointer={self.pointer}, current={self.current})"

    # --- Current cell ---

    @property
    def current(self) -> int:
        return self.cells[self.pointer]

    def set_current(self, value: int):
        """Store ``value`` truncated to 8 bits in the current cell."""
        self.cells[self.pointer] = value & 0xFF

    def increment(self):
        self.cells[self.pointer] = (self.cells[self.pointer] + 1) & 0xFF

    def decrement(self):
        self.cells[self.pointer] = (self.cells[self.pointer] - 1) & 0xFF

    # --- Pointer movement ---

    def move_right(self):
        if self.pointer == len(self.cells) - 1:
            self.cells.append(0)
        self.pointer += 1

    def move_left(self):
        if self.pointer == 0:
            self.cells.insert(0, 0)
        else:
            self.pointer -= 1

    # --- Inspection ---

    def snapshot(self) -> bytes:
        """Immutable copy of every cell."""
        return bytes(self.cells)

    def hexdump(self, start: int = 0, length: Optional[int] = None) -> str:
        """Hex dump of the tape, 16 cells per row; the pointer cell is bracketed."""
        end = len(self.cells) if length is None else min(len(self.cells), start + length)
        lines = []
        for row in range(start, end, 16):
            cells = range(row, min(row + 16, end))
            hex_cells = ' '.join(
                f'[{self.cells[i]:02X}]' if i == self.pointer else f' {self.cells[i]:02X} '
                for i in cells
            )
            ascii_cells = ''.join(
                chr(self.cells[i]) if 0x20 <= self.cells[i] < 0x7F else '.'
                for i in cells
            )
            lines.append(f'{row:06X}  {hex_cells:<79}  {ascii_cells}')
        return '\n'.join(lines)
