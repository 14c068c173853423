import itertools
import random

import numpy as np
import pytest

from block_grid.game.pieces import (
    BASE_SHAPES,
    PALETTE,
    Piece,
    ShapeType,
    color_for_shape,
    generate_piece_set,
    hex_color,
    rgb_color,
)


def test_catalog_has_seven_shapes_and_six_colors():
    assert len(BASE_SHAPES) == 7
    assert len(PALETTE) == 6


def test_color_follows_shape_index():
    assert color_for_shape(ShapeType.SQUARE) == 1
    assert color_for_shape(ShapeType.TEE) == 6
    # 3x3 square wraps around the palette
    assert color_for_shape(ShapeType.BIG_SQUARE) == 1


def test_palette_lookup():
    assert hex_color(3) == "#1E90FF"
    assert rgb_color(1) == (0xFF, 0x07, 0x3A)
    with pytest.raises(ValueError):
        hex_color(0)


def test_cells_at_offsets_occupied_cells_only():
    piece = Piece.from_type(ShapeType.CORNER)
    assert piece.cells_at(2, 5) == [(2, 5), (3, 5), (3, 6)]
    assert piece.size == 3


def test_shapes_are_read_only():
    piece = Piece.from_type(ShapeType.LINE_H)
    with pytest.raises(ValueError):
        piece.shape[0, 0] = 0


def test_generate_piece_set_draws_three_with_fresh_ids():
    rng = random.Random(7)
    ids = itertools.count(1)
    first = generate_piece_set(rng, ids)
    second = generate_piece_set(rng, ids)
    assert len(first) == 3
    assert [p.piece_id for p in first + second] == [1, 2, 3, 4, 5, 6]
    for p in first + second:
        assert p.color == color_for_shape(p.kind)
        assert np.array_equal(p.shape, BASE_SHAPES[p.kind])


def test_generate_piece_set_covers_catalog():
    rng = random.Random(0)
    ids = itertools.count()
    seen = {p.kind for _ in range(200) for p in generate_piece_set(rng, ids)}
    assert seen == set(ShapeType)
