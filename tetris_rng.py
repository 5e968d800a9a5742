"""7-bag randomizer module"""
import random
from typing import List, Optional

from tetris_shapes import PIECE_TYPES


class SevenBag:
    """
    Shuffle-without-replacement piece generator.

    Each cycle deals all seven piece types exactly once. When the bag runs
    dry on a draw it is refilled and permuted with Fisher-Yates, so every
    one of the 7! orderings is equally likely.
    """

    PIECES = list(PIECE_TYPES)

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        # An explicit rng wins over a seed; seed None => system entropy
        self.rng = rng if rng is not None else random.Random(seed)
        self.pieces: List[str] = []

    def _refill(self) -> None:
        self.pieces = self.PIECES[:]
        for i in range(len(self.pieces) - 1, 0, -1):
            j = self.rng.randint(0, i)
            self.pieces[i], self.pieces[j] = self.pieces[j], self.pieces[i]

    def next_piece(self) -> str:
        if not self.pieces:
            self._refill()
        return self.pieces.pop()

    def remaining(self) -> int:
        return len(self.pieces)

    def reset(self) -> None:
        """Drop whatever is left of the current cycle."""
        self.pieces = []
