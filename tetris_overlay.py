import pygame
from tetris_engine import GameEvent, GameState

MESSAGES = {
    GameState.IDLE: "Press Enter to start",
    GameState.PAUSED: "Paused",
    GameState.GAME_OVER: "Game Over",
}


class Overlay:
    """Centered status message; follows engine notifications."""
    def __init__(self):
        self.active = True
        self.message = MESSAGES[GameState.IDLE]
        self.hint = ""

    def on_event(self, event, engine):
        if event in (GameEvent.STARTED, GameEvent.RESUMED):
            self.active = False; self.message = ""; self.hint = ""
        elif event == GameEvent.PAUSED:
            self.active = True; self.message = MESSAGES[GameState.PAUSED]; self.hint = "P to resume"
        elif event == GameEvent.GAME_OVER:
            self.active = True; self.message = MESSAGES[GameState.GAME_OVER]; self.hint = "Enter to restart"

    def draw(self, screen, font, big_font, rect):
        if not self.active: return
        s = pygame.Surface(rect.size, pygame.SRCALPHA); s.fill((20, 25, 40, 200))
        screen.blit(s, rect.topleft)
        msg = big_font.render(self.message, True, (230, 240, 255))
        screen.blit(msg, msg.get_rect(center=(rect.centerx, rect.centery - 12)))
        if self.hint:
            h = font.render(self.hint, True, (200, 210, 235))
            screen.blit(h, h.get_rect(center=(rect.centerx, rect.centery + 20)))
