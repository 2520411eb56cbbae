
"""Piece catalog, rotation, active piece model"""
from dataclasses import dataclass
from typing import Dict, NamedTuple, Tuple

Shape = Tuple[Tuple[int, ...], ...]

TETROMINO_TYPES = ("I", "O", "T", "S", "Z", "J", "L")

SHAPES: Dict[str, Shape] = {
    "I": ((0,0,0,0),(1,1,1,1),(0,0,0,0),(0,0,0,0)),
    "O": ((1,1),(1,1)),
    "T": ((0,1,0),(1,1,1),(0,0,0)),
    "S": ((0,1,1),(1,1,0),(0,0,0)),
    "Z": ((1,1,0),(0,1,1),(0,0,0)),
    "J": ((1,0,0),(1,1,1),(0,0,0)),
    "L": ((0,0,1),(1,1,1),(0,0,0)),
}

COLORS: Dict[str, str] = {
    "I": "#2196F3",
    "O": "#FFEB3B",
    "T": "#9C27B0",
    "S": "#43A047",
    "Z": "#E53935",
    "J": "#1565C0",
    "L": "#FFA726",
}


class PieceDefinition(NamedTuple):
    shape: Shape
    color: str


_CATALOG: Dict[str, PieceDefinition] = {t: PieceDefinition(SHAPES[t], COLORS[t]) for t in TETROMINO_TYPES}


def lookup(t: str) -> PieceDefinition:
    return _CATALOG[t]


def rotate_cw(m: Shape) -> Shape:
    """Quarter turn clockwise; an NxN matrix stays NxN."""
    return tuple(tuple(r) for r in zip(*m[::-1]))


@dataclass(frozen=True)
class ActivePiece:
    t: str
    shape: Shape
    x: int
    y: int
    color: str

    @staticmethod
    def spawn(t: str, cols: int) -> "ActivePiece":
        d = lookup(t)
        w = len(d.shape[0])
        return ActivePiece(t, d.shape, (cols - w) // 2, 0, d.color)

    def moved(self, dx: int = 0, dy: int = 0) -> "ActivePiece":
        return ActivePiece(self.t, self.shape, self.x + dx, self.y + dy, self.color)

    def at(self, y: int) -> "ActivePiece":
        return ActivePiece(self.t, self.shape, self.x, y, self.color)

    def rotated(self) -> "ActivePiece":
        return ActivePiece(self.t, rotate_cw(self.shape), self.x, self.y, self.color)

    def cells(self):
        return [(self.x + c, self.y + r) for r, row in enumerate(self.shape) for c, v in enumerate(row) if v]
