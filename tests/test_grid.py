import numpy as np

from block_grid.game import ClearedCell, GameGrid, ShapeType

from conftest import make_piece


def test_place_line_on_empty_grid(grid):
    piece = make_piece(ShapeType.LINE_H)
    assert grid.can_place(piece, 0, 0)
    assert grid.place(piece, 0, 0) == 3
    assert grid.cells[0, 0] and grid.cells[0, 1] and grid.cells[0, 2]
    assert np.count_nonzero(grid.cells) == 3
    result = grid.clear_lines()
    assert result.lines_cleared == 0
    assert result.cleared_cells == []


def test_place_then_can_place_same_origin_fails(grid):
    piece = make_piece(ShapeType.TEE)
    grid.place(piece, 4, 4)
    assert not grid.can_place(piece, 4, 4)


def test_can_place_rejects_out_of_bounds(grid):
    line = make_piece(ShapeType.LINE_H)
    assert not grid.can_place(line, -1, 0)
    assert not grid.can_place(line, 13, 0)
    assert grid.can_place(line, 12, 0)
    vertical = make_piece(ShapeType.LINE_V)
    assert not grid.can_place(vertical, 0, 9)
    assert grid.can_place(vertical, 0, 8)


def test_can_place_rejects_negative_rows(grid):
    vertical = make_piece(ShapeType.LINE_V)
    assert not grid.can_place(vertical, 0, -1)


def test_can_place_only_checks_occupied_shape_cells(grid):
    corner = make_piece(ShapeType.CORNER)  # [[1,1],[0,1]]
    grid.cells[1, 0] = 2
    assert grid.can_place(corner, 0, 0)
    grid.cells[1, 1] = 2
    assert not grid.can_place(corner, 0, 0)


def test_can_place_true_implies_cells_inside_and_empty():
    rng = np.random.default_rng(3)
    g = GameGrid(6, 5)
    g.cells[...] = (rng.random((5, 6)) < 0.4).astype(np.int8)
    for kind in ShapeType:
        piece = make_piece(kind)
        for row in range(-3, 8):
            for col in range(-3, 9):
                if g.can_place(piece, col, row):
                    for x, y in piece.cells_at(col, row):
                        assert g.is_inside(x, y)
                        assert g.cells[y, x] == 0


def test_full_row_is_cleared_and_recorded(grid):
    grid.cells[10, :] = 3
    grid.cells[9, 0] = 5
    result = grid.clear_lines()
    assert result.lines_cleared == 1
    assert len(result.cleared_cells) == 15
    assert result.cleared_cells[0] == ClearedCell(0, 10, 3)
    # Row 9 drops into the cleared slot
    assert grid.cells[10, 0] == 5
    assert np.count_nonzero(grid.cells) == 1


def test_rows_above_shift_down_rows_below_stay(grid):
    grid.cells[5, :] = 1
    grid.cells[2, 3] = 4
    grid.cells[8, 7] = 6
    grid.clear_lines()
    assert grid.cells[3, 3] == 4
    assert grid.cells[8, 7] == 6
    assert np.count_nonzero(grid.cells) == 2


def test_adjacent_full_rows_are_all_cleared(grid):
    grid.cells[9:11, :] = 2
    result = grid.clear_lines()
    assert result.lines_cleared == 2
    assert len(result.cleared_cells) == 30
    assert grid.is_empty()
    # Bottom row is reported first
    assert result.cleared_cells[0].y == 10


def test_full_column_is_cleared_and_cells_shift_right(grid):
    grid.cells[:, 4] = 1
    grid.cells[0, 2] = 6
    grid.cells[0, 9] = 5
    result = grid.clear_lines()
    assert result.lines_cleared == 1
    assert len(result.cleared_cells) == 11
    assert all(c.x == 4 for c in result.cleared_cells)
    assert grid.cells[0, 3] == 6
    assert grid.cells[0, 9] == 5
    assert not grid.cells[:, 0].any()


def test_row_and_column_intersection_recorded_twice(grid):
    grid.cells[10, :] = 1
    grid.cells[:, 0] = 2
    result = grid.clear_lines()
    assert result.lines_cleared == 2
    assert len(result.cleared_cells) == 15 + 11
    corner = [c for c in result.cleared_cells if (c.x, c.y) == (0, 10)]
    assert len(corner) == 2
    assert grid.is_empty()


def test_clear_lines_mutates_in_place(grid):
    view = grid.cells
    grid.cells[0, :] = 1
    grid.clear_lines()
    assert grid.cells is view
    assert grid.is_empty()


def test_valid_origins_on_empty_grid():
    g = GameGrid(4, 3)
    big = make_piece(ShapeType.BIG_SQUARE)
    assert g.valid_origins(big) == [(0, 0), (1, 0)]
    g.cells[0, 1] = 1
    assert g.valid_origins(big) == []
    assert not g.fits_anywhere(big)
