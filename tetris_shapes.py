"""Shape catalog: piece types, zero-rotation masks and colors"""
from typing import Dict, List, Tuple

COLS, ROWS = 10, 20

PIECE_TYPES = ("I", "J", "L", "O", "S", "T", "Z")

# Canonical spawn orientation. Never mutate these; Piece.spawn copies them.
SHAPES: Dict[str, Tuple[Tuple[int, ...], ...]] = {
    "I": ((0,0,0,0),
          (1,1,1,1),
          (0,0,0,0),
          (0,0,0,0)),
    "J": ((1,0,0),
          (1,1,1),
          (0,0,0)),
    "L": ((0,0,1),
          (1,1,1),
          (0,0,0)),
    "O": ((1,1),
          (1,1)),
    "S": ((0,1,1),
          (1,1,0),
          (0,0,0)),
    "T": ((0,1,0),
          (1,1,1),
          (0,0,0)),
    "Z": ((1,1,0),
          (0,1,1),
          (0,0,0)),
}

COLORS: Dict[str, Tuple[int,int,int]] = {
    "I": (0, 245, 212),
    "J": (67, 97, 238),
    "L": (249, 199, 79),
    "O": (255, 209, 102),
    "S": (144, 190, 109),
    "T": (157, 78, 221),
    "Z": (249, 65, 68),
}


def shape_matrix(t: str) -> List[List[int]]:
    """Fresh mutable copy of a catalog shape."""
    return [list(row) for row in SHAPES[t]]
