"""
Rendering helpers for the Tetris project.

- Pre-render block cell Surfaces per color (solid + ghost outline) and blit them.
- Pre-render the static background (grid + panel frame) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
- Cache a BOARD SURFACE with all *locked* blocks; rebuild it only on lock/start.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from tetris_layout import Dims
from tetris_shapes import COLORS, SHAPES

PREVIEW_CELLS = 4

@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    next_type: Optional[str] = ""
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    next_s: Optional[pygame.Surface] = None
    controls: Optional[list] = None

class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self.board_rect = pygame.Rect(dims.board_x, dims.board_y, dims.board_w, dims.board_h)

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        cols, rows = d.board_w // d.cell, d.board_h // d.cell
        for x in range(cols+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        # Next preview frame
        self.pv_cell = max(12, int(d.cell*0.75))
        self.pv_x = d.panel_x + 12
        self.pv_y = d.panel_y + 150
        frame = pygame.Rect(self.pv_x-6, self.pv_y-6, self.pv_cell*PREVIEW_CELLS+12, self.pv_cell*PREVIEW_CELLS+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        self.ghost_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        for t, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            pygame.draw.rect(s, (0,0,0), (0,0,c-2,c-2), 1)
            self.cell_surf[t] = s
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, col, (0,0,c-8,c-8), 2)
            self.ghost_surf[t] = g

    def redraw_static(self, screen: pygame.Surface):
        screen.blit(self.bg, (0,0))

    # ---------- Board surface cache ----------
    def rebuild_board_surface(self, board):
        """Rebuilds the "locked blocks" surface from board contents."""
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y, row in enumerate(board):
            for x, t in enumerate(row):
                if t:
                    self.board_surface.blit(self.cell_surf[t], (x*c + 1, y*c + 1))

    def blit_board_surface(self, screen: pygame.Surface):
        screen.blit(self.board_surface, self.board_rect.topleft)

    # ---------- Active piece + ghost ----------
    def draw_cell(self, screen: pygame.Surface, t: str, bx: int, by: int):
        rx = self.dims.board_x + bx*self.dims.cell + 1
        ry = self.dims.board_y + by*self.dims.cell + 1
        screen.blit(self.cell_surf[t], (rx, ry))

    def draw_ghost_cell(self, screen: pygame.Surface, t: str, bx: int, by: int):
        rx = self.dims.board_x + bx*self.dims.cell + 4
        ry = self.dims.board_y + by*self.dims.cell + 4
        screen.blit(self.ghost_surf[t], (rx, ry))

    def draw_piece(self, screen: pygame.Surface, piece, ghost_row: Optional[int] = None):
        if piece is None:
            return
        if ghost_row is not None and ghost_row != piece.y:
            for x, y in piece.cells():
                gy = y - piece.y + ghost_row
                if gy >= 0:
                    self.draw_ghost_cell(screen, piece.t, x, gy)
        for x, y in piece.cells():
            if y >= 0:
                self.draw_cell(screen, piece.t, x, y)

    # ---------- HUD / Panel ----------
    def _render_preview(self, next_type: Optional[str]) -> Optional[pygame.Surface]:
        if next_type is None:
            return None
        s = pygame.Surface((self.pv_cell*PREVIEW_CELLS, self.pv_cell*PREVIEW_CELLS), pygame.SRCALPHA)
        shape = SHAPES[next_type]
        offx = (PREVIEW_CELLS - len(shape[0])) // 2
        offy = max(0, (PREVIEW_CELLS - len(shape)) // 2)
        for y, row in enumerate(shape):
            for x, v in enumerate(row):
                if v:
                    block = pygame.Surface((self.pv_cell-2, self.pv_cell-2))
                    block.fill(COLORS[next_type])
                    s.blit(block, ((x + offx)*self.pv_cell + 1, (y + offy)*self.pv_cell + 1))
        return s

    def draw_panel_hud(self, screen: pygame.Surface, score: int, level: int, lines: int,
                       next_type: Optional[str]):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("Tetris", True, (197,202,233))
        if score != self.hud.score:
            self.hud.score = score
            self.hud.score_s = f.render(f"Score: {score}", True, (200,210,240))
        if level != self.hud.level:
            self.hud.level = level
            self.hud.level_s = f.render(f"Level: {level}", True, (200,210,240))
        if lines != self.hud.lines:
            self.hud.lines = lines
            self.hud.lines_s = f.render(f"Lines: {lines}", True, (200,210,240))
        if next_type != self.hud.next_type:
            self.hud.next_type = next_type
            self.hud.next_s = self._render_preview(next_type)
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(f.render("Next:", True, (200,210,240)), (d.panel_x + 12, d.panel_y + 126))
        if self.hud.next_s:
            screen.blit(self.hud.next_s, (self.pv_x, self.pv_y))
        if not self.hud.controls:
            self.hud.controls = [f.render(txt, True, col) for txt, col in CONTROLS]
        y = d.panel_y + 150 + self.pv_cell*PREVIEW_CELLS + 24
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20

CONTROLS: List[Tuple[str, Tuple[int,int,int]]] = [
    ("Controls:", (200,210,240)),
    ("←/→ A/D Move", (165,175,215)),
    ("↓ S Soft drop", (165,175,215)),
    ("↑ W Rot CW", (165,175,215)),
    ("Q/Z Rot CCW", (165,175,215)),
    ("Space Hard drop", (165,175,215)),
    ("P/Esc Pause", (165,175,215)),
    ("Enter Start", (165,175,215)),
]
