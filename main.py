import logging
import sys

import pygame

from tetris import Command, Status, TetrisGame
from tetris_config import CONFIG
from tetris_input import command_for
from tetris_layout import compute_dims
from tetris_render import RenderAssets
from tetris_timer import GRAVITY_EVENT, GravityTimer

log = logging.getLogger(__name__)


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except (TypeError, pygame.error):
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def sync_gravity(timer: GravityTimer, game: TetrisGame):
    """Re-arm gravity after a state change, or hold it while not running.

    Every accepted move or rotation restarts the gravity period, so a piece
    that is shifted faster than the interval does not fall until input stops.
    """
    if game.state.status is Status.RUNNING:
        timer.arm(game.gravity_interval())
    else:
        timer.cancel()


def run_command(game: TetrisGame, timer: GravityTimer, cmd: Command) -> bool:
    """Apply one input command; returns True if the snapshot changed."""
    if cmd is Command.RESTART:
        timer.cancel()
    before = game.state
    game.apply(cmd)
    if game.state is before:
        return False
    log.debug("%s -> %s", cmd.name, game.state.status.value)
    sync_gravity(timer, game)
    return True


def run_gravity(game: TetrisGame, timer: GravityTimer) -> bool:
    before = game.state
    game.tick()
    if game.state is before:
        return False
    sync_gravity(timer, game)
    return True


def main():
    logging.basicConfig(level=CONFIG["LOG_LEVEL"], format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, GRAVITY_EVENT])

    game = TetrisGame()
    dims = compute_dims(game.rows, game.cols)
    screen = recreate_window(dims)
    pygame.display.set_caption("Classic Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 36)
    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()

    timer = GravityTimer()
    sync_gravity(timer, game)

    while True:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                timer.cancel()
                pygame.quit(); sys.exit()
            if e.type == GRAVITY_EVENT:
                run_gravity(game, timer)
            elif e.type == pygame.KEYDOWN:
                cmd = command_for(e.key, game.state.status, getattr(e, "repeat", False))
                if cmd is not None:
                    run_command(game, timer, cmd)

        render.draw(screen, game.state)
        pygame.display.flip()
        clock.tick(60)


if __name__ == '__main__':
    main()
