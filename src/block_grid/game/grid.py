from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .pieces import Piece


Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class ClearedCell:
    x: int
    y: int
    color: int


@dataclass
class ClearResult:
    lines_cleared: int = 0
    cleared_cells: List[ClearedCell] = field(default_factory=list)


class GameGrid:
    """Discrete 2D grid for block placement.

    The grid uses 0 for empty cells and palette color ids (1-based) for filled
    cells. `cells` is indexed `[y, x]` and is only ever mutated in place.
    """

    def __init__(self, cols: int, rows: int) -> None:
        self.cols = int(cols)
        self.rows = int(rows)
        self.cells = np.zeros((self.rows, self.cols), dtype=np.int8)

    def reset(self) -> None:
        self.cells.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_empty(self) -> bool:
        return not self.cells.any()

    def can_place(self, piece: Piece, col: int, row: int) -> bool:
        for x, y in piece.cells_at(col, row):
            if not self.is_inside(x, y):
                return False
            if self.cells[y, x] != 0:
                return False
        return True

    def place(self, piece: Piece, col: int, row: int) -> int:
        """Write the piece's color into its cells and return how many were written.

        Assumes the position was already validated with `can_place`.
        """
        cells = piece.cells_at(col, row)
        for x, y in cells:
            self.cells[y, x] = piece.color
        return len(cells)

    def valid_origins(self, piece: Piece) -> List[Coordinate]:
        origins: List[Coordinate] = []
        for row in range(self.rows):
            for col in range(self.cols):
                if self.can_place(piece, col, row):
                    origins.append((col, row))
        return origins

    def fits_anywhere(self, piece: Piece) -> bool:
        for row in range(self.rows):
            for col in range(self.cols):
                if self.can_place(piece, col, row):
                    return True
        return False

    def full_rows(self) -> np.ndarray:
        return np.flatnonzero(np.all(self.cells != 0, axis=1))

    def full_columns(self) -> np.ndarray:
        return np.flatnonzero(np.all(self.cells != 0, axis=0))

    def clear_lines(self) -> ClearResult:
        """Clear every full row and column found on the current grid.

        Rows and columns are detected together, before anything is removed, so a
        cell sitting in both a full row and a full column is reported twice.
        Removed rows are replaced by empty rows at the top, removed columns by
        empty columns at the left edge.
        """
        full_rows = self.full_rows()
        full_cols = self.full_columns()
        if full_rows.size == 0 and full_cols.size == 0:
            return ClearResult()

        cleared: List[ClearedCell] = []
        for y in full_rows[::-1]:
            for x in range(self.cols):
                cleared.append(ClearedCell(x, int(y), int(self.cells[y, x])))
        for x in full_cols:
            for y in range(self.rows):
                cleared.append(ClearedCell(int(x), y, int(self.cells[y, x])))

        remaining = np.delete(self.cells, full_rows, axis=0)
        remaining = np.delete(remaining, full_cols, axis=1)
        shifted = np.zeros_like(self.cells)
        shifted[full_rows.size :, full_cols.size :] = remaining
        self.cells[...] = shifted

        return ClearResult(lines_cleared=int(full_rows.size + full_cols.size), cleared_cells=cleared)

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()
