"""Keyboard -> engine command mapping"""
import pygame

MOVE_LEFT, MOVE_RIGHT = "move_left", "move_right"
SOFT_DROP, HARD_DROP = "soft_drop", "hard_drop"
ROTATE_CW, ROTATE_CCW = "rotate_cw", "rotate_ccw"
PAUSE, START = "pause", "start"

KEYMAP = {
    pygame.K_LEFT: MOVE_LEFT, pygame.K_a: MOVE_LEFT,
    pygame.K_RIGHT: MOVE_RIGHT, pygame.K_d: MOVE_RIGHT,
    pygame.K_DOWN: SOFT_DROP, pygame.K_s: SOFT_DROP,
    pygame.K_UP: ROTATE_CW, pygame.K_w: ROTATE_CW,
    pygame.K_q: ROTATE_CCW, pygame.K_z: ROTATE_CCW,
    pygame.K_SPACE: HARD_DROP,
    pygame.K_p: PAUSE, pygame.K_ESCAPE: PAUSE,
    pygame.K_RETURN: START, pygame.K_KP_ENTER: START, pygame.K_r: START,
}

PLAY_COMMANDS = {
    MOVE_LEFT: lambda g: g.move(-1),
    MOVE_RIGHT: lambda g: g.move(1),
    SOFT_DROP: lambda g: g.soft_drop(),
    HARD_DROP: lambda g: g.hard_drop(),
    ROTATE_CW: lambda g: g.rotate(1),
    ROTATE_CCW: lambda g: g.rotate(-1),
}


def dispatch(engine, key):
    """Run the command bound to key; returns the command name or None.

    Play commands only go through while running and not paused; pause needs a
    game in progress; start always works (it doubles as restart).
    """
    cmd = KEYMAP.get(key)
    if cmd is None:
        return None
    if cmd == START:
        engine.start()
        return cmd
    if not engine.running:
        return None
    if cmd == PAUSE:
        engine.toggle_pause()
        return cmd
    if engine.paused:
        return None
    PLAY_COMMANDS[cmd](engine)
    return cmd


def on_focus_lost(engine):
    if engine.running and not engine.paused:
        engine.toggle_pause()
