"""
Game engine: the state machine that owns board, active/next piece and bag.

The presentation layer holds a GameEngine, feeds it commands and elapsed
frame time, and reads state back through the accessors or snapshot().

    Idle --start()--> Running <--toggle_pause()--> Paused
                         |
                         +-- spawn collision --> GameOver --start()--> Running

Drop timing is frame-coupled: tick() performs at most one soft-drop step no
matter how much time elapsed, so a long stall never drops a piece by more
than one row per frame.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from tetris_board import Board, collide, create_empty, ghost_y, merge, sweep
from tetris_config import CONFIG
from tetris_piece import Piece, rotate_matrix
from tetris_rng import SevenBag
from tetris_shapes import COLS, ROWS

logger = logging.getLogger(__name__)


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameEvent(Enum):
    STARTED = "started"
    LOCKED = "locked"
    LINES_CLEARED = "lines_cleared"
    LEVEL_UP = "level_up"
    PAUSED = "paused"
    RESUMED = "resumed"
    GAME_OVER = "game_over"


Listener = Callable[[GameEvent, "GameEngine"], None]


@dataclass(frozen=True)
class Snapshot:
    board: Tuple[Tuple[Optional[str], ...], ...]
    active: Optional[Piece]
    next_type: Optional[str]
    score: int
    lines: int
    level: int
    drop_interval: int
    state: GameState

    @property
    def running(self) -> bool:
        return self.state in (GameState.RUNNING, GameState.PAUSED)

    @property
    def paused(self) -> bool:
        return self.state is GameState.PAUSED


def level_for(lines: int, lines_per_level: int = 10) -> int:
    return lines // lines_per_level + 1


def drop_interval_for(level: int, base: int = 1000, step: int = 80, floor: int = 100) -> int:
    return max(floor, base - (level - 1) * step)


def line_clear_score(cleared: int, level: int, table=(0, 100, 300, 500, 800)) -> int:
    if cleared <= 0 or cleared >= len(table):
        return 0
    return table[cleared] * level


def _check_direction(direction: int) -> None:
    if direction not in (-1, 1):
        raise ValueError(f"direction must be -1 or +1, got {direction!r}")


class GameEngine:
    def __init__(self, config: Optional[dict] = None, rng: Optional[random.Random] = None,
                 cols: int = COLS, rows: int = ROWS):
        self.config = dict(CONFIG)
        if config:
            self.config.update(config)
        self.cols, self.rows = cols, rows
        self._rng = rng
        self.board: Board = create_empty(cols, rows)
        self.bag = self._new_bag()
        self.active: Optional[Piece] = None
        self.next_type: Optional[str] = None
        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_interval = self.config["BASE_DROP_MS"]
        self.drop_counter = 0.0
        self.state = GameState.IDLE
        self._listeners: List[Listener] = []

    def _new_bag(self) -> SevenBag:
        if self._rng is not None:
            return SevenBag(rng=self._rng)
        return SevenBag(seed=self.config["BAG_SEED"])

    # ---------- notifications ----------
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self)

    # ---------- read-only view ----------
    @property
    def running(self) -> bool:
        return self.state in (GameState.RUNNING, GameState.PAUSED)

    @property
    def paused(self) -> bool:
        return self.state is GameState.PAUSED

    @property
    def accepting_input(self) -> bool:
        return self.state is GameState.RUNNING and self.active is not None

    def snapshot(self) -> Snapshot:
        return Snapshot(
            board=tuple(tuple(row) for row in self.board),
            active=self.active.copy() if self.active else None,
            next_type=self.next_type,
            score=self.score,
            lines=self.lines,
            level=self.level,
            drop_interval=self.drop_interval,
            state=self.state,
        )

    def ghost_y(self) -> Optional[int]:
        if self.active is None:
            return None
        p = self.active
        return ghost_y(self.board, p.shape, p.x, p.y)

    def collides(self, shape, x: int, y: int) -> bool:
        return collide(self.board, shape, x, y)

    # ---------- lifecycle ----------
    def start(self) -> None:
        """Reset everything and begin a fresh game (also used to restart)."""
        self.board = create_empty(self.cols, self.rows)
        self.bag = self._new_bag()
        self.active = None
        self.next_type = None
        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_interval = self.config["BASE_DROP_MS"]
        self.drop_counter = 0.0
        self.state = GameState.RUNNING
        logger.info("game started")
        self.spawn_piece()
        if self.state is GameState.RUNNING:
            self._emit(GameEvent.STARTED)

    def stop(self) -> None:
        """Halt the loop without ending the game as lost; later ticks are ignored."""
        self.state = GameState.IDLE
        self.active = None
        self.drop_counter = 0.0

    def toggle_pause(self) -> bool:
        if self.state is GameState.RUNNING:
            self.state = GameState.PAUSED
            self._emit(GameEvent.PAUSED)
            return True
        if self.state is GameState.PAUSED:
            self.state = GameState.RUNNING
            self._emit(GameEvent.RESUMED)
            return True
        return False

    def resume(self) -> bool:
        if self.state is GameState.PAUSED:
            return self.toggle_pause()
        return False

    def game_over(self) -> None:
        self.state = GameState.GAME_OVER
        self.active = None
        self.drop_counter = 0.0
        logger.info("game over: score=%d lines=%d level=%d", self.score, self.lines, self.level)
        self._emit(GameEvent.GAME_OVER)

    # ---------- timing ----------
    def tick(self, elapsed_ms: float) -> bool:
        """Advance the drop counter; returns True when a drop step happened."""
        if elapsed_ms < 0:
            raise ValueError(f"elapsed time must be non-negative, got {elapsed_ms!r}")
        if not self.accepting_input:
            return False
        self.drop_counter += elapsed_ms
        if self.drop_counter > self.drop_interval:
            self.soft_drop()
            return True
        return False

    # ---------- commands ----------
    def move(self, direction: int) -> bool:
        _check_direction(direction)
        if not self.accepting_input:
            return False
        p = self.active
        if collide(self.board, p.shape, p.x + direction, p.y):
            return False
        p.x += direction
        return True

    def rotate(self, direction: int) -> bool:
        _check_direction(direction)
        if not self.accepting_input:
            return False
        p = self.active
        rotated = rotate_matrix(p.shape, direction)
        for dx in self.config["KICK_OFFSETS"]:
            if not collide(self.board, rotated, p.x + dx, p.y):
                p.shape = rotated
                p.x += dx
                return True
        return False

    def soft_drop(self) -> bool:
        """One row down, or lock if blocked. Returns True if the piece moved."""
        if not self.accepting_input:
            return False
        p = self.active
        moved = not collide(self.board, p.shape, p.x, p.y + 1)
        if moved:
            p.y += 1
        else:
            self.lock_piece()
        self.drop_counter = 0.0
        return moved

    def hard_drop(self) -> int:
        """Drop straight down and lock; returns the number of rows fallen."""
        if not self.accepting_input:
            return 0
        p = self.active
        start_y = p.y
        while not collide(self.board, p.shape, p.x, p.y + 1):
            p.y += 1
        self.lock_piece()
        self.drop_counter = 0.0
        return p.y - start_y

    # ---------- locking & spawning ----------
    def lock_piece(self) -> int:
        """Merge the active piece, clear rows, score, then spawn the next piece."""
        p = self.active
        if p is None:
            return 0
        merge(self.board, p.shape, p.x, p.y, p.t)
        cleared = sweep(self.board)
        logger.debug("locked %s at (%d, %d), cleared %d", p.t, p.x, p.y, cleared)
        self._emit(GameEvent.LOCKED)
        if cleared:
            self._score_lines(cleared)
        self.spawn_piece()
        return cleared

    def _score_lines(self, cleared: int) -> None:
        cfg = self.config
        self.score += line_clear_score(cleared, self.level, cfg["LINE_CLEAR_SCORES"])
        self.lines += cleared
        old_level = self.level
        self.level = level_for(self.lines, cfg["LINES_PER_LEVEL"])
        self.drop_interval = drop_interval_for(
            self.level, cfg["BASE_DROP_MS"], cfg["DROP_STEP_MS"], cfg["MIN_DROP_MS"])
        self._emit(GameEvent.LINES_CLEARED)
        if self.level != old_level:
            logger.debug("level up: %d -> %d, interval %dms", old_level, self.level, self.drop_interval)
            self._emit(GameEvent.LEVEL_UP)

    def spawn_piece(self) -> None:
        t = self.next_type if self.next_type is not None else self.bag.next_piece()
        self.active = Piece.spawn(t, self.cols)
        self.next_type = self.bag.next_piece()
        if collide(self.board, self.active.shape, self.active.x, self.active.y):
            self.game_over()
