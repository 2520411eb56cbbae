import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from dataclasses import replace

import pygame
import pytest

from tetris import Status, TetrisGame
from tetris_layout import compute_dims
from tetris_piece import ActivePiece
from tetris_render import RenderAssets


@pytest.fixture(scope="module")
def fonts():
    pygame.font.init()
    yield pygame.font.SysFont(None, 22), pygame.font.SysFont(None, 36)
    pygame.font.quit()


def draw(state, fonts):
    dims = compute_dims(state.rows, state.cols)
    screen = pygame.Surface((dims.total_w, dims.total_h))
    RenderAssets(dims, *fonts).draw(screen, state)
    return dims, screen


def test_active_piece_and_ghost_are_drawn(fonts):
    game = TetrisGame(seed=5)
    game.state = replace(game.state, active=ActivePiece.spawn("O", game.cols))
    dims, screen = draw(game.state, fonts)
    x, y = dims.cell_origin(4, 0, 1)
    assert tuple(screen.get_at((x + 2, y + 2)))[:3] == tuple(pygame.Color("#FFEB3B"))[:3]
    # ghost outline sits on the floor rows
    gx, gy = dims.cell_origin(4, 18, 4)
    assert tuple(screen.get_at((gx, gy)))[:3] == tuple(pygame.Color("#FFEB3B"))[:3]


def test_game_over_frame_draws_without_piece(fonts):
    game = TetrisGame(seed=5)
    game.state = replace(game.state, active=None, status=Status.GAME_OVER)
    draw(game.state, fonts)
