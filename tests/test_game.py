from dataclasses import replace

import pytest

from tetris import (
    SCORE_TABLE, Command, GameState, InvariantViolation, Status, TetrisGame, level_for, line_clear_points,
)
from tetris_board import Cell, create_empty, filled_cells, merge
from tetris_piece import TETROMINO_TYPES, ActivePiece


def new_game(seed=7, **kw):
    return TetrisGame(rows=20, cols=10, seed=seed, seed_source=lambda: 99, **kw)


def with_piece(game, piece, **fields):
    game.state = replace(game.state, active=piece, **fields)
    return game


def filled_rows_except_col0(board, rows):
    for y in rows:
        board = merge(board, ((1,) * 9,), 1, y, "#777777")
    return board


def vertical_i(x=-2, y=0):
    return ActivePiece.spawn("I", 10).rotated().moved(dx=x - 3, dy=y)


def test_new_session_state():
    game = new_game()
    s = game.state
    assert s.status is Status.RUNNING
    assert (s.score, s.lines, s.level) == (0, 0, 0)
    assert filled_cells(s.board) == []
    assert s.active.y == 0
    assert s.next_type in TETROMINO_TYPES
    assert game.seed == 7


def test_same_seed_same_pieces():
    a, b = new_game(seed=11), new_game(seed=11)
    assert (a.state.active.t, a.state.next_type) == (b.state.active.t, b.state.next_type)


def test_o_piece_falls_to_floor_and_locks():
    game = with_piece(new_game(), ActivePiece.spawn("O", 10))
    assert (game.state.active.x, game.state.active.y) == (4, 0)
    for _ in range(18):
        game.tick()
    assert game.state.active.y == 18
    assert filled_cells(game.state.board) == []
    upcoming = game.state.next_type
    game.tick()
    assert sorted(filled_cells(game.state.board)) == [(4, 18), (4, 19), (5, 18), (5, 19)]
    assert game.state.status is Status.RUNNING
    assert game.state.active.t == upcoming
    assert game.state.active.y == 0


def test_soft_down_never_locks():
    game = with_piece(new_game(), ActivePiece.spawn("O", 10).moved(dy=18))
    before = game.state
    assert game.soft_down() is before
    assert filled_cells(game.state.board) == []


def test_move_blocked_by_wall_is_a_no_op():
    game = with_piece(new_game(), ActivePiece.spawn("O", 10).moved(dx=-4))
    before = game.state
    assert game.move_horizontal(-1) is before
    game.move_horizontal(1)
    assert game.state.active.x == 1


def test_move_direction_must_be_unit():
    with pytest.raises(ValueError):
        new_game().move_horizontal(0)


def test_rotation_without_kicks():
    game = with_piece(new_game(), vertical_i(x=-2, y=5))
    before = game.state
    # horizontal I at x=-2 would stick out of the left wall
    assert game.rotate() is before
    game.move_horizontal(1)
    game.move_horizontal(1)
    game.rotate()
    assert game.state.active.shape == ((0, 0, 0, 0), (0, 0, 0, 0), (1, 1, 1, 1), (0, 0, 0, 0))


def test_hard_drop_locks_immediately():
    game = with_piece(new_game(), ActivePiece.spawn("O", 10))
    game.hard_drop()
    assert sorted(filled_cells(game.state.board)) == [(4, 18), (4, 19), (5, 18), (5, 19)]
    assert game.state.active.y == 0


def test_vertical_i_clears_single_row():
    game = new_game()
    board = filled_rows_except_col0(create_empty(), [19])
    with_piece(game, vertical_i(), board=board)
    game.hard_drop()
    s = game.state
    assert (s.score, s.lines, s.level) == (40, 1, 0)
    assert sorted(filled_cells(s.board)) == [(0, 17), (0, 18), (0, 19)]


@pytest.mark.parametrize("rows,level,expected", [
    (1, 0, 40), (2, 0, 100), (3, 0, 300), (4, 0, 1200),
    (1, 1, 80), (2, 1, 200), (3, 1, 600), (4, 1, 2400),
])
def test_line_clear_scoring(rows, level, expected):
    game = new_game()
    board = filled_rows_except_col0(create_empty(), range(20 - rows, 20))
    with_piece(game, vertical_i(), board=board, lines=level * 10, level=level)
    game.hard_drop()
    assert game.state.score == expected
    assert game.state.lines == level * 10 + rows


def test_score_table_helpers():
    assert SCORE_TABLE == (0, 40, 100, 300, 1200)
    assert line_clear_points(0, 5) == 0
    assert line_clear_points(4, 2) == 3600


def test_level_follows_lines():
    assert [level_for(n, 19) for n in (0, 9, 10, 19, 20)] == [0, 0, 1, 1, 2]
    assert level_for(1000, 19) == 19


def test_level_up_uses_updated_line_total():
    game = new_game()
    board = filled_rows_except_col0(create_empty(), [19])
    with_piece(game, vertical_i(), board=board, lines=9)
    game.hard_drop()
    assert (game.state.lines, game.state.level) == (10, 1)
    # points are awarded at the level the clear happened on
    assert game.state.score == 40
    assert game.gravity_interval() == game.level_speeds[1]


def test_level_is_clamped_to_speed_table():
    game = new_game(level_speeds=[500, 400])
    board = filled_rows_except_col0(create_empty(), [19])
    with_piece(game, vertical_i(), board=board, lines=39, level=1)
    game.hard_drop()
    assert game.state.level == 1
    assert game.gravity_interval() == 400


def test_game_over_only_after_lock_on_spawn_row():
    game = new_game()
    # row 2 blocked under the O, but not full
    board = merge(create_empty(), ((1,) * 9,), 0, 2, "#777777")
    with_piece(game, ActivePiece.spawn("O", 10), board=board)
    game.move_horizontal(1)
    assert game.state.status is Status.RUNNING
    game.tick()
    s = game.state
    assert s.status is Status.GAME_OVER
    assert s.active is None
    assert s.board[0][5] == Cell(True, "#FFEB3B")
    assert s.board[1][6].filled


def test_lock_below_spawn_row_keeps_running():
    game = with_piece(new_game(), ActivePiece.spawn("O", 10).moved(dy=1))
    game.hard_drop()
    assert game.state.status is Status.RUNNING


def test_spawn_overlap_is_not_checked_before_lock():
    game = new_game()
    board = merge(create_empty(), ((1,) * 9,) * 2, 0, 1, "#777777")
    with_piece(game, ActivePiece.spawn("O", 10).moved(dx=-4, dy=18), board=board)
    game.tick()
    # piece locked at y=18; the next one spawns even though it overlaps rows 1-2
    assert game.state.status is Status.RUNNING
    assert game.state.active.y == 0
    game.tick()
    assert game.state.status is Status.GAME_OVER


def test_pause_blocks_gameplay():
    game = new_game()
    game.toggle_pause()
    assert game.state.status is Status.PAUSED
    before = game.state
    for op in (game.tick, game.soft_down, game.rotate, game.hard_drop):
        assert op() is before
    assert game.move_horizontal(1) is before
    game.toggle_pause()
    assert game.state.status is Status.RUNNING


def test_game_over_ignores_pause_and_moves():
    game = new_game()
    game.state = replace(game.state, active=None, status=Status.GAME_OVER)
    before = game.state
    assert game.toggle_pause() is before
    assert game.tick() is before
    assert game.hard_drop() is before


def test_restart_from_any_state():
    game = new_game()
    game.state = replace(game.state, score=500, lines=12, level=1, status=Status.GAME_OVER, active=None)
    s = game.restart()
    assert s is game.state
    assert (s.score, s.lines, s.level, s.status) == (0, 0, 0, Status.RUNNING)
    assert s.active is not None
    assert game.seed == 99

    game.toggle_pause()
    assert game.restart().status is Status.RUNNING


def test_running_without_piece_is_an_invariant_violation():
    game = new_game()
    game.state = replace(game.state, active=None)
    with pytest.raises(InvariantViolation):
        game.tick()


def test_snapshots_are_not_changed_by_later_operations():
    game = with_piece(new_game(), ActivePiece.spawn("O", 10))
    old = game.state
    game.hard_drop()
    assert filled_cells(old.board) == []
    assert old.active.y == 0


def test_ghost_and_cells():
    game = with_piece(new_game(), ActivePiece.spawn("O", 10))
    assert game.state.ghost == (4, 18)
    assert sorted(game.state.cells()) == [(4, 0), (4, 1), (5, 0), (5, 1)]
    assert GameState(create_empty(), None, "I").ghost is None


def test_apply_dispatches_commands():
    game = with_piece(new_game(), ActivePiece.spawn("O", 10))
    game.apply(Command.MOVE_LEFT)
    assert game.state.active.x == 3
    game.apply(Command.MOVE_RIGHT)
    game.apply(Command.MOVE_RIGHT)
    assert game.state.active.x == 5
    game.apply(Command.SOFT_DOWN)
    assert game.state.active.y == 1
    game.apply(Command.PAUSE)
    assert game.state.status is Status.PAUSED
    game.apply(Command.RESTART)
    assert game.state.status is Status.RUNNING
    game.apply(Command.HARD_DROP)
    assert len(filled_cells(game.state.board)) == 4


def test_rejects_tiny_board_and_empty_speed_table():
    with pytest.raises(ValueError):
        TetrisGame(rows=3, cols=10, seed=1)
    with pytest.raises(ValueError):
        TetrisGame(level_speeds=[], seed=1)
