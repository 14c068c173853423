"""Screen geometry for the pygame front end.

Kept free of pygame so pointer math can be exercised without a display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from block_grid.game import GameConfig, Piece


Rect = Tuple[int, int, int, int]


@dataclass(frozen=True)
class Layout:
    cols: int
    rows: int
    cell_size: int = 40
    margin: int = 20
    slots: int = 3

    @classmethod
    def for_config(cls, config: GameConfig, cell_size: int = 40, margin: int = 20) -> "Layout":
        return cls(config.cols, config.rows, cell_size, margin, config.pieces_per_set)

    @property
    def board_rect(self) -> Rect:
        return (self.margin, self.margin, self.cols * self.cell_size, self.rows * self.cell_size)

    @property
    def panel_x(self) -> int:
        return self.margin * 2 + self.cols * self.cell_size

    @property
    def slot_height(self) -> int:
        # Tallest catalog shape is three cells, plus one cell of spacing.
        return self.cell_size * 4

    @property
    def window_size(self) -> Tuple[int, int]:
        width = self.panel_x + self.cell_size * 3 + self.margin
        height = max(self.margin * 2 + self.rows * self.cell_size, self.margin * 2 + self.slots * self.slot_height)
        return width, height

    def cell_rect(self, col: int, row: int) -> Rect:
        return (
            self.margin + col * self.cell_size,
            self.margin + row * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def preview_rect(self, slot: int, piece: Piece) -> Rect:
        h, w = piece.shape.shape
        return (
            self.panel_x,
            self.margin + slot * self.slot_height,
            w * self.cell_size,
            h * self.cell_size,
        )

    def preview_hit(self, px: int, py: int, pieces: Sequence[Piece]) -> Optional[Tuple[int, int, int]]:
        """Return `(slot, grab_dx, grab_dy)` for a click on a preview, else None.

        The grab offset is where inside the piece's bounding box the click
        landed, so the piece stays under the pointer while dragged.
        """
        for slot, piece in enumerate(pieces):
            x, y, w, h = self.preview_rect(slot, piece)
            if x <= px < x + w and y <= py < y + h:
                return slot, px - x, py - y
        return None

    def drop_origin(self, px: int, py: int, grab_dx: int, grab_dy: int) -> Tuple[int, int]:
        """Grid origin `(col, row)` for a piece held at `(grab_dx, grab_dy)`."""
        col = (px - self.margin - grab_dx) // self.cell_size
        row = (py - self.margin - grab_dy) // self.cell_size
        return col, row

    def on_board(self, px: int, py: int) -> bool:
        x, y, w, h = self.board_rect
        return x <= px < x + w and y <= py < y + h
