"""Game module for block-grid.

Exports the core game engine and supporting classes:
- GameGrid: Grid representation, placement checks and line clearing
- Piece: Offered polyomino with its color and handle
- ShapeType: Enum of the shape catalog
- ScoringRules: Points per cleared line
- FadeQueue: Transient fade-out records for cleared cells
- EventBus: Signals the engine emits for presentation
- PuzzleEngine: Turn protocol and state management
"""

from .animation import FadeEntry, FadeQueue
from .core import GameConfig, InvalidSelection, PlacementOutcome, PuzzleEngine, TurnState
from .events import EventBus
from .grid import ClearedCell, ClearResult, GameGrid
from .pieces import PALETTE, Piece, ShapeType, generate_piece_set, hex_color, rgb_color
from .rules import ScoringRules

__all__ = [
    "ClearedCell",
    "ClearResult",
    "EventBus",
    "FadeEntry",
    "FadeQueue",
    "GameConfig",
    "GameGrid",
    "InvalidSelection",
    "PALETTE",
    "Piece",
    "PlacementOutcome",
    "PuzzleEngine",
    "ScoringRules",
    "ShapeType",
    "TurnState",
    "generate_piece_set",
    "hex_color",
    "rgb_color",
]
