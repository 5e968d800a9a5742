import logging
import sys

import pygame

from tetris_config import CONFIG
from tetris_engine import GameEngine, GameEvent
from tetris_input import dispatch, on_focus_lost
from tetris_layout import compute_dims
from tetris_overlay import Overlay
from tetris_render import RenderAssets

logger = logging.getLogger("tetris")


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    logging.basicConfig(level=CONFIG["LOG_LEVEL"],
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.WINDOWFOCUSLOST])

    dims = compute_dims()
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)

    render = RenderAssets(dims, font)
    clock = pygame.time.Clock()

    engine = GameEngine()
    overlay = Overlay()
    engine.subscribe(overlay.on_event)

    # Locked blocks only change on lock or (re)start
    board_dirty = [True]

    def on_board_change(event, game):
        if event in (GameEvent.STARTED, GameEvent.LOCKED):
            board_dirty[0] = True
    engine.subscribe(on_board_change)

    logger.info("window %dx%d, cell %d", dims.total_w, dims.total_h, dims.cell)

    while True:
        dt = clock.tick(CONFIG["FPS"])

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                engine.stop()
                pygame.quit(); sys.exit()
            if e.type == pygame.WINDOWFOCUSLOST:
                on_focus_lost(engine)
            if e.type == pygame.KEYDOWN:
                dispatch(engine, e.key)

        engine.tick(dt)

        if board_dirty[0]:
            render.rebuild_board_surface(engine.board)
            board_dirty[0] = False

        render.redraw_static(screen)
        render.blit_board_surface(screen)
        ghost = engine.ghost_y() if CONFIG["SHOW_GHOST"] else None
        render.draw_piece(screen, engine.active, ghost)
        render.draw_panel_hud(screen, engine.score, engine.level, engine.lines, engine.next_type)
        overlay.draw(screen, font, big_font, render.board_rect)
        pygame.display.flip()


if __name__ == '__main__':
    main()
