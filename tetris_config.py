
from typing import Optional, Sequence

CONFIG = {
    "ROWS": 20,
    "COLS": 10,
    # ms between gravity ticks per level (NES frame counts at ~60 Hz)
    "LEVEL_SPEEDS_MS": [
        800, 717, 633, 550, 467, 383, 300, 217, 133, 100,
        83, 83, 83, 67, 67, 67, 50, 50, 50, 33,
    ],
    "CELL_SIZE": 32,
    "SEED": None,
    "LOG_LEVEL": "INFO",
}


def gravity_interval(level: int, speeds: Optional[Sequence[int]] = None) -> int:
    """Milliseconds between gravity ticks at ``level`` (clamped into the table)."""
    table = CONFIG["LEVEL_SPEEDS_MS"] if speeds is None else speeds
    return int(table[max(0, min(level, len(table) - 1))])
