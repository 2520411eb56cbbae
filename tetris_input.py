"""Key bindings: pygame key codes to game commands"""
from typing import Dict, Optional

import pygame

from tetris import Command, Status

KEYMAP: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_a: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_d: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DOWN,
    pygame.K_s: Command.SOFT_DOWN,
    pygame.K_UP: Command.ROTATE,
    pygame.K_w: Command.ROTATE,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_p: Command.PAUSE,
    pygame.K_r: Command.RESTART,
}


def command_for(key: int, status: Status, repeat: bool = False) -> Optional[Command]:
    cmd = KEYMAP.get(key)
    if cmd is None:
        return None
    # after game over only restart does anything
    if status is Status.GAME_OVER and cmd is not Command.RESTART:
        return None
    if repeat and cmd is Command.HARD_DROP:
        return None
    return cmd
