CONFIG = {
    "CELL_SIZE": 24,
    "FPS": 60,
    "BASE_DROP_MS": 1000,
    "MIN_DROP_MS": 100,
    "DROP_STEP_MS": 80,
    "LINES_PER_LEVEL": 10,
    "LINE_CLEAR_SCORES": [0, 100, 300, 500, 800],
    "KICK_OFFSETS": [0, -1, 1, -2, 2],
    "BAG_SEED": None,
    "SHOW_GHOST": True,
    "LOG_LEVEL": "WARNING",
}
