from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Tuple

import numpy as np


class ShapeType(IntEnum):
    SQUARE = 0
    LINE_H = 1
    LINE_V = 2
    CORNER = 3
    CORNER_MIRRORED = 4
    TEE = 5
    BIG_SQUARE = 6


Shape = np.ndarray


BASE_SHAPES = {
    ShapeType.SQUARE: np.array([[1, 1], [1, 1]], dtype=np.int8),
    ShapeType.LINE_H: np.array([[1, 1, 1]], dtype=np.int8),
    ShapeType.LINE_V: np.array([[1], [1], [1]], dtype=np.int8),
    ShapeType.CORNER: np.array([[1, 1], [0, 1]], dtype=np.int8),
    ShapeType.CORNER_MIRRORED: np.array([[1, 0], [1, 1]], dtype=np.int8),
    ShapeType.TEE: np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
    ShapeType.BIG_SQUARE: np.array([[1, 1, 1], [1, 1, 1], [1, 1, 1]], dtype=np.int8),
}

for _shape in BASE_SHAPES.values():
    _shape.setflags(write=False)


# Grid cells store 1-based ids into this palette; 0 is empty.
PALETTE: Tuple[str, ...] = (
    "#FF073A",  # red
    "#00FF7F",  # green
    "#1E90FF",  # blue
    "#FFD700",  # yellow
    "#FF4500",  # orange
    "#9400D3",  # violet
)


def color_for_shape(kind: ShapeType) -> int:
    return int(kind) % len(PALETTE) + 1


def hex_color(color: int) -> str:
    if not 1 <= color <= len(PALETTE):
        raise ValueError(f"no palette entry for color id {color}")
    return PALETTE[color - 1]


def rgb_color(color: int) -> Tuple[int, int, int]:
    value = hex_color(color).lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


@dataclass(frozen=True, eq=False)
class Piece:
    """A piece on offer.

    `piece_id` is the handle the input layer uses to refer to this piece; it is
    unique for the lifetime of an engine and independent of the piece's slot.
    """

    piece_id: int
    kind: ShapeType
    color: int

    @classmethod
    def from_type(cls, kind: ShapeType, piece_id: int = 0) -> "Piece":
        return cls(piece_id=piece_id, kind=kind, color=color_for_shape(kind))

    @property
    def shape(self) -> Shape:
        return BASE_SHAPES[self.kind]

    @property
    def size(self) -> int:
        return int(np.count_nonzero(self.shape))

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        s = self.shape
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells


def random_piece(rng: random.Random, piece_id: int) -> Piece:
    kind = rng.choice(list(ShapeType))
    return Piece.from_type(kind, piece_id)


def generate_piece_set(rng: random.Random, ids: Iterator[int], count: int = 3) -> List[Piece]:
    """Draw `count` pieces, each shape uniform over the catalog."""
    return [random_piece(rng, next(ids)) for _ in range(count)]
