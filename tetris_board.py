"""Board helpers: create, collide, merge, sweep, ghost"""
from typing import List, Optional

from tetris_shapes import COLS, ROWS

Board = List[List[Optional[str]]]
Matrix = List[List[int]]


def create_empty(cols: int = COLS, rows: int = ROWS) -> Board:
    return [[None] * cols for _ in range(rows)]


def collide(board: Board, shape: Matrix, x: int, y: int) -> bool:
    """Return True if shape at (x, y) hits a side wall, the floor or a locked cell.

    Cells above row 0 are only checked against the side walls, which lets a
    piece spawn partly out of view.
    """
    rows, cols = len(board), len(board[0])
    for r, row in enumerate(shape):
        for c, v in enumerate(row):
            if not v:
                continue
            bx, by = x + c, y + r
            if bx < 0 or bx >= cols or by >= rows:
                return True
            if by >= 0 and board[by][bx]:
                return True
    return False


def merge(board: Board, shape: Matrix, x: int, y: int, t: str) -> None:
    """Write the shape into the board as type t (no collision check).

    Occupied cells that land above row 0 are discarded.
    """
    for r, row in enumerate(shape):
        for c, v in enumerate(row):
            if v:
                by = y + r
                if by >= 0:
                    board[by][x + c] = t


def full_rows(board: Board) -> List[int]:
    return [y for y, row in enumerate(board) if all(row)]


def sweep(board: Board) -> int:
    """Clear full lines in place and return the number of cleared rows."""
    cols = len(board[0])
    c = 0
    y = len(board) - 1
    while y >= 0:
        if all(board[y][x] for x in range(cols)):
            del board[y]
            board.insert(0, [None] * cols)
            c += 1
        else:
            y -= 1
    return c


def ghost_y(board: Board, shape: Matrix, x: int, y: int) -> int:
    """Row the shape would rest on if dropped straight down from (x, y)."""
    while not collide(board, shape, x, y + 1):
        y += 1
    return y
