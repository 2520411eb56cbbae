"""
Drawing helpers for the pygame host.

- Pre-render block cell Surfaces per color (solid + ghost outline).
- Pre-render the static background (grid + panel frame) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, Optional
from tetris import GameState, Status
from tetris_layout import Dims
from tetris_piece import COLORS, lookup

@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    next_type: str = ""
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    next_preview: Optional[pygame.Surface] = None
    controls: Optional[list] = None

class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        for x in range(d.cols+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(d.rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        self.pv_cell = max(14, int(d.cell*0.75))
        self.pv_x = d.panel_x + 12
        self.pv_y = d.panel_y + 150
        frame = pygame.Rect(self.pv_x-6, self.pv_y-6, self.pv_cell*4+12, self.pv_cell*4+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        self.ghost_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        for col in COLORS.values():
            s = pygame.Surface((c-2, c-2))
            s.fill(pygame.Color(col))
            self.cell_surf[col] = s
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, pygame.Color(col), (0,0,c-8,c-8), 2)
            self.ghost_surf[col] = g

    # ---------- Full frame ----------
    def draw(self, screen: pygame.Surface, state: GameState):
        screen.blit(self.bg, (0,0))
        for y, row in enumerate(state.board):
            for x, cell in enumerate(row):
                if cell.filled:
                    screen.blit(self.cell_surf[cell.color], self.dims.cell_origin(x, y, 1))
        p = state.active
        if p is not None:
            _, gy = state.ghost
            for cx, cy in p.at(gy).cells():
                screen.blit(self.ghost_surf[p.color], self.dims.cell_origin(cx, cy, 4))
            for cx, cy in p.cells():
                screen.blit(self.cell_surf[p.color], self.dims.cell_origin(cx, cy, 1))
        self.draw_panel_hud(screen, state)
        if state.status is Status.PAUSED:
            self._banner(screen, "PAUSED (P to Resume)", (220,240,255))
        elif state.status is Status.GAME_OVER:
            self._banner(screen, "GAME OVER (R to Restart)", (255,220,220))

    def _banner(self, screen: pygame.Surface, text: str, color):
        d = self.dims
        msg = self.big_font.render(text, True, color)
        screen.blit(msg, msg.get_rect(center=(d.board_x + d.board_w // 2, d.board_y + d.board_h // 2)))

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, state: GameState):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("Classic Tetris", True, (197,202,233))
        if state.score != self.hud.score:
            self.hud.score = state.score
            self.hud.score_s = f.render(f"Score: {state.score}", True, (200,210,240))
        if state.level != self.hud.level:
            self.hud.level = state.level
            # level is zero-based internally
            self.hud.level_s = f.render(f"Level: {state.level + 1}", True, (200,210,240))
        if state.lines != self.hud.lines:
            self.hud.lines = state.lines
            self.hud.lines_s = f.render(f"Lines: {state.lines}", True, (200,210,240))
        if state.next_type != self.hud.next_type:
            self.hud.next_type = state.next_type
            self.hud.next_preview = self._preview(state.next_type)
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(f.render("Next:", True, (200,210,240)), (d.panel_x + 12, d.panel_y + 126))
        screen.blit(self.hud.next_preview, (self.pv_x, self.pv_y))
        if not self.hud.controls:
            self.hud.controls = [
                f.render("Controls:", True, (200,210,240)),
                f.render("←/→ or A/D Move", True, (165,175,215)),
                f.render("↓ or S Soft drop", True, (165,175,215)),
                f.render("↑ or W Rotate", True, (165,175,215)),
                f.render("Space Hard drop", True, (165,175,215)),
                f.render("P Pause • R Restart", True, (165,175,215)),
            ]
        y = d.panel_y + 260
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20

    def _preview(self, t: str) -> pygame.Surface:
        s = pygame.Surface((self.pv_cell*4, self.pv_cell*4), pygame.SRCALPHA)
        shape, color = lookup(t)
        offx = (4 - len(shape[0])) // 2
        offy = max(0, (4 - len(shape)) // 2)
        block = pygame.Surface((self.pv_cell-2, self.pv_cell-2))
        block.fill(pygame.Color(color))
        for y, row in enumerate(shape):
            for x, v in enumerate(row):
                if v:
                    s.blit(block, ((x + offx) * self.pv_cell + 1, (y + offy) * self.pv_cell + 1))
        return s
