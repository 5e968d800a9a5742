import random
import unittest

from tetris_engine import (GameEngine, GameEvent, GameState, drop_interval_for,
                           level_for, line_clear_score)
from tetris_piece import Piece, rotate_cw


def started_engine(seed=0):
    engine = GameEngine(rng=random.Random(seed))
    engine.start()
    return engine


def place(engine, t, x, y, turns=0):
    p = Piece.spawn(t)
    for _ in range(turns):
        p.rotate(1)
    p.x, p.y = x, y
    engine.active = p
    return p


class FormulaTests(unittest.TestCase):
    def test_level(self):
        self.assertEqual(level_for(0), 1)
        self.assertEqual(level_for(9), 1)
        self.assertEqual(level_for(10), 2)
        self.assertEqual(level_for(25), 3)

    def test_drop_interval(self):
        self.assertEqual(drop_interval_for(1), 1000)
        self.assertEqual(drop_interval_for(2), 920)
        self.assertEqual(drop_interval_for(12), 120)
        self.assertEqual(drop_interval_for(13), 100)
        self.assertEqual(drop_interval_for(40), 100)

    def test_line_clear_score(self):
        self.assertEqual(line_clear_score(0, 5), 0)
        self.assertEqual(line_clear_score(1, 1), 100)
        self.assertEqual(line_clear_score(2, 2), 600)
        self.assertEqual(line_clear_score(3, 1), 500)
        self.assertEqual(line_clear_score(4, 3), 2400)


class LifecycleTests(unittest.TestCase):
    def test_idle_until_started(self):
        engine = GameEngine(rng=random.Random(0))
        self.assertIs(engine.state, GameState.IDLE)
        self.assertFalse(engine.running)
        self.assertIsNone(engine.active)
        self.assertFalse(engine.move(1))
        self.assertFalse(engine.tick(5000))
        self.assertFalse(engine.toggle_pause())

    def test_start_resets_state(self):
        engine = started_engine()
        engine.score, engine.lines, engine.level, engine.drop_interval = 900, 12, 2, 920
        engine.board[19][0] = "T"
        engine.start()
        self.assertIs(engine.state, GameState.RUNNING)
        self.assertEqual((engine.score, engine.lines, engine.level, engine.drop_interval), (0, 0, 1, 1000))
        self.assertTrue(all(cell is None for row in engine.board for cell in row))
        self.assertIsNotNone(engine.active)
        self.assertIsNotNone(engine.next_type)
        self.assertEqual(engine.active.y, -1)

    def test_first_pieces_come_from_one_bag(self):
        engine = started_engine(3)
        seen = [engine.active.t, engine.next_type]
        for _ in range(5):
            engine.spawn_piece()
            seen.append(engine.next_type)
        self.assertEqual(sorted(seen), sorted("IJLOSTZ"))

    def test_next_is_promoted_on_spawn(self):
        engine = started_engine()
        upcoming = engine.next_type
        engine.hard_drop()
        self.assertEqual(engine.active.t, upcoming)

    def test_pause_toggle(self):
        engine = started_engine()
        self.assertTrue(engine.toggle_pause())
        self.assertTrue(engine.paused)
        self.assertTrue(engine.running)
        y = engine.active.y
        self.assertFalse(engine.tick(5000))
        self.assertFalse(engine.move(-1))
        self.assertFalse(engine.soft_drop())
        self.assertEqual(engine.active.y, y)
        self.assertEqual(engine.drop_counter, 0)
        self.assertTrue(engine.resume())
        self.assertFalse(engine.paused)
        self.assertFalse(engine.resume())

    def test_stop_halts_ticks(self):
        engine = started_engine()
        engine.stop()
        self.assertIs(engine.state, GameState.IDLE)
        self.assertFalse(engine.tick(5000))

    def test_run_until_topped_out(self):
        engine = started_engine(11)
        events = []
        engine.subscribe(lambda e, g: events.append(e))
        for _ in range(500):
            if engine.state is GameState.GAME_OVER:
                break
            engine.hard_drop()
        self.assertIs(engine.state, GameState.GAME_OVER)
        self.assertFalse(engine.running)
        self.assertIsNone(engine.active)
        self.assertEqual(events.count(GameEvent.GAME_OVER), 1)
        self.assertFalse(engine.toggle_pause())
        self.assertEqual(engine.hard_drop(), 0)

        engine.start()
        self.assertIs(engine.state, GameState.RUNNING)
        self.assertEqual(engine.score, 0)

    def test_spawn_collision_ends_game(self):
        engine = started_engine()
        for x in range(10):
            engine.board[0][x] = "Z"
            engine.board[1][x] = "Z" if x else None
        engine.spawn_piece()
        self.assertIs(engine.state, GameState.GAME_OVER)
        self.assertIsNone(engine.active)


class TickTests(unittest.TestCase):
    def test_drop_after_interval_exceeded(self):
        engine = started_engine()
        self.assertFalse(engine.tick(1000))
        self.assertEqual(engine.active.y, -1)
        self.assertTrue(engine.tick(1))
        self.assertEqual(engine.active.y, 0)
        self.assertEqual(engine.drop_counter, 0)

    def test_one_row_per_tick(self):
        engine = started_engine()
        engine.tick(60000)
        self.assertEqual(engine.active.y, 0)

    def test_negative_elapsed(self):
        with self.assertRaises(ValueError):
            started_engine().tick(-1)


class MovementTests(unittest.TestCase):
    def test_move_stops_at_wall(self):
        engine = started_engine()
        p = place(engine, "O", 1, 5)
        self.assertTrue(engine.move(-1))
        self.assertFalse(engine.move(-1))
        self.assertEqual(p.x, 0)

    def test_move_blocked_by_stack(self):
        engine = started_engine()
        engine.board[6][6] = "L"
        p = place(engine, "O", 4, 5)
        self.assertFalse(engine.move(1))
        self.assertEqual(p.x, 4)

    def test_bad_direction(self):
        engine = started_engine()
        with self.assertRaises(ValueError):
            engine.move(0)
        with self.assertRaises(ValueError):
            engine.rotate(2)

    def test_soft_drop_locks_on_floor(self):
        engine = started_engine()
        events = []
        engine.subscribe(lambda e, g: events.append(e))
        place(engine, "O", 0, 18)
        engine.drop_counter = 400
        self.assertFalse(engine.soft_drop())
        self.assertEqual(engine.board[19][:2], ["O", "O"])
        self.assertEqual(engine.board[18][:2], ["O", "O"])
        self.assertEqual(engine.drop_counter, 0)
        self.assertIn(GameEvent.LOCKED, events)
        self.assertEqual(engine.active.y, -1)

    def test_hard_drop_to_floor(self):
        engine = started_engine()
        place(engine, "T", 0, -1)
        self.assertEqual(engine.hard_drop(), 19)
        self.assertEqual(engine.board[19][:3], ["T"] * 3)
        self.assertEqual(engine.board[18][1], "T")


class RotationTests(unittest.TestCase):
    def test_rotate_in_open_space(self):
        engine = started_engine()
        p = place(engine, "T", 3, 5)
        self.assertTrue(engine.rotate(1))
        self.assertEqual(p.shape, [[0, 1, 0], [0, 1, 1], [0, 1, 0]])
        self.assertEqual(p.x, 3)

    def test_kick_prefers_left(self):
        engine = started_engine()
        engine.board[7][4] = "X"
        p = place(engine, "T", 3, 5)
        rotated = rotate_cw(p.shape)
        self.assertTrue(engine.collides(rotated, 3, 5))
        self.assertFalse(engine.collides(rotated, 2, 5))
        self.assertFalse(engine.collides(rotated, 4, 5))
        self.assertTrue(engine.rotate(1))
        self.assertEqual(p.x, 2)

    def test_kick_off_right_wall(self):
        engine = started_engine()
        p = place(engine, "I", 7, 5, turns=1)
        self.assertTrue(engine.rotate(1))
        self.assertEqual(p.x, 6)
        self.assertEqual(p.shape[2], [1, 1, 1, 1])

    def test_rejected_rotation_reverts(self):
        engine = started_engine()
        engine.board[8] = ["S"] * 10
        p = place(engine, "I", 3, 5)
        before = [r[:] for r in p.shape]
        self.assertFalse(engine.rotate(1))
        self.assertEqual(p.shape, before)
        self.assertEqual((p.x, p.y), (3, 5))


class ScoringTests(unittest.TestCase):
    def test_single_at_level_one(self):
        engine = started_engine()
        events = []
        engine.subscribe(lambda e, g: events.append(e))
        engine.board[19] = ["J", "J", "J", None, None, None, None, "L", "L", "L"]
        place(engine, "I", 3, -1)
        engine.hard_drop()
        self.assertEqual(engine.score, 100)
        self.assertEqual(engine.lines, 1)
        self.assertEqual(engine.level, 1)
        self.assertEqual(engine.board[19], [None] * 10)
        self.assertEqual(events[:2], [GameEvent.LOCKED, GameEvent.LINES_CLEARED])
        self.assertNotIn(GameEvent.LEVEL_UP, events)

    def test_tetris_at_level_three(self):
        engine = started_engine()
        engine.lines, engine.level = 20, 3
        for y in range(16, 20):
            engine.board[y] = ["Z"] * 9 + [None]
        place(engine, "I", 7, -1, turns=1)
        engine.hard_drop()
        self.assertEqual(engine.score, 2400)
        self.assertEqual(engine.lines, 24)
        self.assertEqual(engine.level, 3)
        self.assertTrue(all(cell is None for row in engine.board for cell in row))

    def test_level_up_speeds_drop(self):
        engine = started_engine()
        engine.lines = 9
        events = []
        engine.subscribe(lambda e, g: events.append(e))
        engine.board[19] = ["T"] * 8 + [None, None]
        place(engine, "O", 8, -1)
        engine.hard_drop()
        self.assertEqual(engine.score, 100)
        self.assertEqual(engine.level, 2)
        self.assertEqual(engine.drop_interval, 920)
        self.assertIn(GameEvent.LEVEL_UP, events)

    def test_no_clear_no_score(self):
        engine = started_engine()
        place(engine, "O", 0, -1)
        engine.hard_drop()
        self.assertEqual((engine.score, engine.lines), (0, 0))


class SnapshotTests(unittest.TestCase):
    def test_snapshot_is_detached(self):
        engine = started_engine()
        snap = engine.snapshot()
        snap.active.x += 3
        self.assertNotEqual(snap.active.x, engine.active.x)
        self.assertTrue(snap.running)
        self.assertFalse(snap.paused)
        self.assertEqual(len(snap.board), 20)
        engine.board[19][0] = "I"
        self.assertIsNone(snap.board[19][0])

    def test_ghost(self):
        engine = started_engine()
        place(engine, "O", 0, -1)
        self.assertEqual(engine.ghost_y(), 18)
        engine.stop()
        self.assertIsNone(engine.ghost_y())

    def test_unsubscribe(self):
        engine = GameEngine(rng=random.Random(0))
        events = []
        listener = lambda e, g: events.append(e)
        engine.subscribe(listener)
        engine.start()
        engine.unsubscribe(listener)
        engine.toggle_pause()
        self.assertEqual(events, [GameEvent.STARTED])

    def test_config_override(self):
        engine = GameEngine(config={"BASE_DROP_MS": 500}, rng=random.Random(0))
        engine.start()
        self.assertEqual(engine.drop_interval, 500)


if __name__ == "__main__":
    unittest.main()
