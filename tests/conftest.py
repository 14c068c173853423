import sys, os

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from block_grid.game import GameConfig, GameGrid, Piece, PuzzleEngine, ShapeType


@pytest.fixture
def grid():
    return GameGrid(15, 11)


@pytest.fixture
def engine():
    return PuzzleEngine(GameConfig(random_seed=1234))


def make_piece(kind: ShapeType, piece_id: int = 0) -> Piece:
    return Piece.from_type(kind, piece_id)


def offer(engine: PuzzleEngine, *kinds: ShapeType) -> list:
    """Replace the engine's offer with pieces of the given kinds."""
    pieces = [Piece.from_type(kind, 1000 + i) for i, kind in enumerate(kinds)]
    engine._pieces = list(pieces)
    return pieces
