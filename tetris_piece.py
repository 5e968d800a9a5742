"""Piece model, geometric rotation"""
from dataclasses import dataclass, field
from typing import List

from tetris_shapes import COLS, shape_matrix

Matrix = List[List[int]]


def rotate_cw(m: Matrix) -> Matrix:
    # (r, c) -> (c, N-1-r)
    return [list(r) for r in zip(*m[::-1])]


def rotate_ccw(m: Matrix) -> Matrix:
    return [list(c) for c in zip(*m)][::-1]


def rotate_matrix(m: Matrix, direction: int) -> Matrix:
    if direction == 1:
        return rotate_cw(m)
    if direction == -1:
        return rotate_ccw(m)
    raise ValueError(f"rotation direction must be -1 or +1, got {direction!r}")


@dataclass
class Piece:
    t: str
    shape: Matrix = field(repr=False)
    x: int
    y: int

    @staticmethod
    def spawn(t: str, cols: int = COLS) -> "Piece":
        """Centered horizontally, one row above the visible board."""
        shape = shape_matrix(t)
        w = len(shape[0])
        x = cols // 2 - (w + 1) // 2
        return Piece(t, shape, x, -1)

    @property
    def size(self) -> int:
        return len(self.shape)

    def rotate(self, direction: int) -> None:
        self.shape = rotate_matrix(self.shape, direction)

    def copy(self) -> "Piece":
        return Piece(self.t, [r[:] for r in self.shape], self.x, self.y)

    def cells(self):
        """Board coordinates (x, y) of every occupied cell, including rows above 0."""
        return [(self.x + c, self.y + r)
                for r, row in enumerate(self.shape)
                for c, v in enumerate(row) if v]
