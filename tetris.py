"""
Classic Tetris — game-state engine
==================================

This module holds the game state machine. It owns one session at a time:
the board, the falling piece, the preview piece, score/lines/level and the
running/paused/game-over status, plus the session's own bag randomizer.

Every operation returns an immutable ``GameState`` snapshot and stores it as
``game.state``. Moves the rules reject are not errors: the previous snapshot
is simply returned again.

-------------------------------------------------------------
RULES IN SHORT
-------------------------------------------------------------

  • Gravity: ``tick()`` moves the piece one row down, or locks it if it rests
    on the stack or the floor.
  • Locking: merge, clear full rows, score ``SCORE_TABLE[n] * (level + 1)``,
    add the rows to ``lines``, recompute ``level = lines // 10`` (clamped).
  • Game over: a piece that locks while still on the spawn row (y == 0) ends
    the game. Nothing is checked before spawning, so the last piece is always
    placed before the game is declared over.
  • Soft drop never locks; hard drop always does.
  • Rotation has no kicks: a rotation that does not fit is dropped.

The engine never sleeps or reads a clock. The caller decides when to
``tick()`` (see ``gravity_interval()``) and which commands to ``apply()``.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from tetris_board import Board, clear_rows, create_empty, ghost_y, is_valid_position, merge
from tetris_config import CONFIG, gravity_interval
from tetris_piece import ActivePiece
from tetris_rng import BagRandomizer, wallclock_seed

log = logging.getLogger(__name__)

# -------------------------------------------------------------
# CONSTANTS
# -------------------------------------------------------------
LINES_PER_LEVEL = 10
SCORE_TABLE = (0, 40, 100, 300, 1200)   # NES line clear points (multiplied by level+1)
MIN_BOARD_SIDE = 4                      # an I piece must fit either way


class InvariantViolation(RuntimeError):
    """The session is in a state no sequence of operations can produce."""


class Status(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "gameover"


class Command(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DOWN = "soft_down"
    ROTATE = "rotate"
    HARD_DROP = "hard_drop"
    PAUSE = "pause"
    RESTART = "restart"


@dataclass(frozen=True)
class GameState:
    board: Board
    active: Optional[ActivePiece]
    next_type: str
    score: int = 0
    lines: int = 0
    level: int = 0
    status: Status = Status.RUNNING

    @property
    def rows(self) -> int:
        return len(self.board)

    @property
    def cols(self) -> int:
        return len(self.board[0])

    @property
    def ghost(self) -> Optional[Tuple[int, int]]:
        """Where the active piece would come to rest on a hard drop."""
        p = self.active
        if p is None:
            return None
        return p.x, ghost_y(self.board, p.shape, p.x, p.y)

    def cells(self) -> List[Tuple[int, int]]:
        return self.active.cells() if self.active else []


def level_for(lines: int, max_level: int) -> int:
    return min(lines // LINES_PER_LEVEL, max_level)


def line_clear_points(cleared: int, level: int) -> int:
    return SCORE_TABLE[min(cleared, len(SCORE_TABLE) - 1)] * (level + 1)


class TetrisGame:
    """One playable session at a time; ``restart()`` swaps in a fresh one."""

    def __init__(self, rows: Optional[int] = None, cols: Optional[int] = None,
                 level_speeds: Optional[Sequence[int]] = None, seed: Optional[int] = None,
                 seed_source: Callable[[], int] = wallclock_seed):
        self.rows = CONFIG["ROWS"] if rows is None else rows
        self.cols = CONFIG["COLS"] if cols is None else cols
        self.level_speeds = list(CONFIG["LEVEL_SPEEDS_MS"] if level_speeds is None else level_speeds)
        if self.rows < MIN_BOARD_SIDE or self.cols < MIN_BOARD_SIDE:
            raise ValueError(f"board must be at least {MIN_BOARD_SIDE}x{MIN_BOARD_SIDE}, got {self.cols}x{self.rows}")
        if not self.level_speeds:
            raise ValueError("level speed table is empty")
        self.max_level = len(self.level_speeds) - 1
        self.seed_source = seed_source
        if seed is None:
            seed = CONFIG["SEED"]
        self.restart(seed)

    # ---------- session lifecycle ----------
    def restart(self, seed: Optional[int] = None) -> GameState:
        if seed is None:
            seed = self.seed_source()
        self.seed = seed
        self.rng = BagRandomizer.seeded(seed)
        first = self.rng.next()
        self.state = GameState(
            board=create_empty(self.rows, self.cols),
            active=ActivePiece.spawn(first, self.cols),
            next_type=self.rng.next(),
        )
        log.info("new session: %dx%d board, seed %d", self.cols, self.rows, seed)
        return self.state

    def toggle_pause(self) -> GameState:
        s = self.state
        if s.status is Status.RUNNING:
            self.state = replace(s, status=Status.PAUSED)
        elif s.status is Status.PAUSED:
            self.state = replace(s, status=Status.RUNNING)
        return self.state

    def gravity_interval(self) -> int:
        return gravity_interval(self.state.level, self.level_speeds)

    # ---------- gameplay ----------
    def _falling(self) -> Optional[ActivePiece]:
        if self.state.status is not Status.RUNNING:
            return None
        if self.state.active is None:
            raise InvariantViolation("running session has no active piece")
        return self.state.active

    def _try(self, candidate: ActivePiece) -> bool:
        if not is_valid_position(self.state.board, candidate.shape, candidate.x, candidate.y):
            return False
        self.state = replace(self.state, active=candidate)
        return True

    def tick(self) -> GameState:
        p = self._falling()
        if p is not None and not self._try(p.moved(dy=1)):
            self._lock(p)
        return self.state

    def move_horizontal(self, direction: int) -> GameState:
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction!r}")
        p = self._falling()
        if p is not None:
            self._try(p.moved(dx=direction))
        return self.state

    def soft_down(self) -> GameState:
        p = self._falling()
        if p is not None:
            self._try(p.moved(dy=1))
        return self.state

    def rotate(self) -> GameState:
        p = self._falling()
        if p is not None:
            self._try(p.rotated())
        return self.state

    def hard_drop(self) -> GameState:
        p = self._falling()
        if p is not None:
            self._lock(p.at(ghost_y(self.state.board, p.shape, p.x, p.y)))
        return self.state

    def _lock(self, p: ActivePiece):
        s = self.state
        board, cleared = clear_rows(merge(s.board, p.shape, p.x, p.y, p.color))
        lines = s.lines + cleared
        level = level_for(lines, self.max_level)
        score = s.score + line_clear_points(cleared, s.level)
        if cleared:
            log.debug("cleared %d row(s), score %d", cleared, score)
        if level != s.level:
            log.info("level %d reached at %d lines", level, lines)
        if p.y == 0:
            self.state = replace(s, board=board, active=None, score=score, lines=lines,
                                 level=level, status=Status.GAME_OVER)
            log.info("game over: score %d, lines %d, level %d", score, lines, level)
            return
        self.state = replace(s, board=board, active=ActivePiece.spawn(s.next_type, self.cols),
                             next_type=self.rng.next(), score=score, lines=lines, level=level)

    # ---------- command dispatch ----------
    def apply(self, command: Command) -> GameState:
        if command is Command.MOVE_LEFT:
            return self.move_horizontal(-1)
        if command is Command.MOVE_RIGHT:
            return self.move_horizontal(1)
        if command is Command.SOFT_DOWN:
            return self.soft_down()
        if command is Command.ROTATE:
            return self.rotate()
        if command is Command.HARD_DROP:
            return self.hard_drop()
        if command is Command.PAUSE:
            return self.toggle_pause()
        if command is Command.RESTART:
            return self.restart()
        raise ValueError(f"unknown command {command!r}")
