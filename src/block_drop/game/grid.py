from __future__ import annotations

from typing import Optional

import numpy as np

from . import pieces
from .pieces import TileType


COL_COUNT = 10
VISIBLE_ROW_COUNT = 20
HIDDEN_ROW_COUNT = 2
ROW_COUNT = VISIBLE_ROW_COUNT + HIDDEN_ROW_COUNT

EMPTY = 0


class Board:
    """Fixed 10x22 grid of placed tiles.

    Row 0 is the top of the hidden buffer; the visible playfield starts at
    ``HIDDEN_ROW_COUNT``. Cells hold 0 for empty or the ``TileType`` value of
    the piece that was locked there.
    """

    def __init__(self) -> None:
        self.width = COL_COUNT
        self.height = ROW_COUNT
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def clear(self) -> None:
        self.grid.fill(EMPTY)

    def is_valid_and_empty(self, kind: TileType, col: int, row: int, rotation: int) -> bool:
        for x, y in pieces.filled_cells(kind, rotation):
            cx = col + x
            cy = row + y
            if cx < 0 or cx >= self.width:
                return False
            if cy >= self.height:
                return False
            # Cells above the top edge are allowed while spawning or rotating.
            if cy < 0:
                continue
            if self.grid[cy, cx] != EMPTY:
                return False
        return True

    def add_piece(self, kind: TileType, col: int, row: int, rotation: int) -> None:
        """Write ``kind`` into every filled cell. The caller validates first."""
        value = int(kind)
        for x, y in pieces.filled_cells(kind, rotation):
            cx = col + x
            cy = row + y
            if cy < 0 or cy >= self.height or cx < 0 or cx >= self.width:
                continue
            self.grid[cy, cx] = value

    def check_lines(self) -> int:
        """Remove every full visible row and return how many were removed."""
        visible = self.grid[HIDDEN_ROW_COUNT:]
        full_rows = np.flatnonzero(np.all(visible != EMPTY, axis=1)) + HIDDEN_ROW_COUNT
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        kept = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return num

    def _check_cell(self, col: int, row: int) -> None:
        if not (0 <= col < self.width and 0 <= row < self.height):
            raise IndexError(f"cell ({col}, {row}) is outside the {self.width}x{self.height} board")

    def is_occupied(self, col: int, row: int) -> bool:
        self._check_cell(col, row)
        return bool(self.grid[row, col] != EMPTY)

    def get_tile(self, col: int, row: int) -> Optional[TileType]:
        self._check_cell(col, row)
        value = int(self.grid[row, col])
        if value == EMPTY:
            return None
        return TileType(value)

    def set_tile(self, col: int, row: int, kind: Optional[TileType]) -> None:
        self._check_cell(col, row)
        self.grid[row, col] = EMPTY if kind is None else int(kind)

    def visible_rows(self) -> np.ndarray:
        view = self.grid[HIDDEN_ROW_COUNT:]
        view.flags.writeable = False
        return view

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
