
"""Board helpers: validity, merge, row clearing, ghost"""
from typing import List, NamedTuple, Tuple

from tetris_piece import Shape

EMPTY_COLOR = "transparent"


class Cell(NamedTuple):
    filled: bool = False
    color: str = EMPTY_COLOR


EMPTY_CELL = Cell()

Row = Tuple[Cell, ...]
Board = Tuple[Row, ...]


def create_empty(rows: int = 20, cols: int = 10) -> Board:
    return tuple(_empty_row(cols) for _ in range(rows))


def _empty_row(cols: int) -> Row:
    return (EMPTY_CELL,) * cols


def is_valid_position(board: Board, shape: Shape, x: int, y: int) -> bool:
    """True if every occupied shape cell lands inside the board on an empty cell."""
    rows, cols = len(board), len(board[0])
    for r, row in enumerate(shape):
        for c, v in enumerate(row):
            if not v:
                continue
            bx, by = x + c, y + r
            if bx < 0 or bx >= cols or by < 0 or by >= rows:
                return False
            if board[by][bx].filled:
                return False
    return True


def merge(board: Board, shape: Shape, x: int, y: int, color: str) -> Board:
    """Return a copy of ``board`` with the shape stamped in (no validity check).

    Cells that fall outside the board are dropped; rows the shape does not
    touch are shared with the input, which is safe since rows are tuples.
    """
    rows, cols = len(board), len(board[0])
    out: List[Row] = list(board)
    touched = {}
    for r, row in enumerate(shape):
        for c, v in enumerate(row):
            bx, by = x + c, y + r
            if v and 0 <= by < rows and 0 <= bx < cols:
                touched.setdefault(by, list(board[by]))[bx] = Cell(True, color)
    for by, cells in touched.items():
        out[by] = tuple(cells)
    return tuple(out)


def clear_rows(board: Board) -> Tuple[Board, int]:
    """Drop full rows and pad the top with empty ones; returns (board, cleared)."""
    cols = len(board[0])
    kept = [row for row in board if not all(cell.filled for cell in row)]
    cleared = len(board) - len(kept)
    if not cleared:
        return board, 0
    return tuple([_empty_row(cols)] * cleared + kept), cleared


def ghost_y(board: Board, shape: Shape, x: int, y: int) -> int:
    """Return the y position where the shape would land if hard-dropped."""
    while is_valid_position(board, shape, x, y + 1):
        y += 1
    return y


def filled_cells(board: Board) -> List[Tuple[int, int]]:
    return [(x, y) for y, row in enumerate(board) for x, cell in enumerate(row) if cell.filled]
