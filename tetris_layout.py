# tetris_layout.py
from dataclasses import dataclass
from typing import Tuple
from tetris_config import CONFIG

MARGIN = 16
PANEL_W = 200


@dataclass(frozen=True)
class Dims:
    """Pixel geometry of the window: board on the left, side panel on the right."""
    rows: int
    cols: int
    cell: int
    margin: int = MARGIN
    panel_w: int = PANEL_W

    @property
    def board_x(self) -> int:
        return self.margin

    @property
    def board_y(self) -> int:
        return self.margin

    @property
    def board_w(self) -> int:
        return self.cols * self.cell

    @property
    def board_h(self) -> int:
        return self.rows * self.cell

    @property
    def panel_x(self) -> int:
        return self.board_x + self.board_w + self.margin

    @property
    def panel_y(self) -> int:
        return self.margin

    @property
    def total_w(self) -> int:
        return self.panel_x + self.panel_w + self.margin

    @property
    def total_h(self) -> int:
        return self.board_h + 2 * self.margin

    def cell_origin(self, bx: int, by: int, inset: int = 0) -> Tuple[int, int]:
        """Top-left pixel of board cell (bx, by), pushed in by ``inset``."""
        return (self.board_x + bx * self.cell + inset,
                self.board_y + by * self.cell + inset)


def compute_dims(rows: int, cols: int) -> Dims:
    return Dims(rows=rows, cols=cols, cell=int(CONFIG["CELL_SIZE"]))
