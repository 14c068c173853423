from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .animation import FadeQueue
from .events import (
    EVENT_GAME_OVER,
    EVENT_LINES_CLEARED,
    EVENT_PIECE_PLACED,
    EVENT_PIECE_SELECTED,
    EVENT_PIECES_REFILLED,
    EVENT_PLACEMENT_REJECTED,
    EventBus,
)
from .grid import ClearedCell, ClearResult, GameGrid
from .pieces import Piece, generate_piece_set
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class InvalidSelection(LookupError):
    """Raised for a preview index or piece handle that is not on offer."""


class TurnState(Enum):
    IDLE = "idle"
    SELECTED = "selected"


@dataclass
class GameConfig:
    cols: int = 15
    rows: int = 11
    pieces_per_set: int = 3
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError(f"grid must be at least 1x1, got {self.cols}x{self.rows}")
        if self.pieces_per_set <= 0:
            raise ValueError("pieces_per_set must be positive")

    @classmethod
    def from_canvas(cls, width: int, height: int, cell_size: int = 40, **kwargs: Any) -> "GameConfig":
        return cls(cols=width // cell_size, rows=height // cell_size, **kwargs)


@dataclass
class PlacementOutcome:
    placed: bool
    lines_cleared: int = 0
    score_delta: int = 0
    cleared_cells: List[ClearedCell] = field(default_factory=list)
    game_over: bool = False
    final_score: Optional[int] = None


class PuzzleEngine:
    """Owns the grid, the offered pieces, the score and the selection.

    Input layers call `select_piece` and `attempt_placement`; presentation reads
    `grid`, `offered`, `score` and `fades`, or subscribes to events on `bus`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        bus: Optional[EventBus] = None,
        auto_reset: bool = True,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.bus = bus or EventBus()
        # When False the board is kept as it ended until `reset` is called.
        self.auto_reset = auto_reset
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.cols, self.config.rows)
        self.fades = FadeQueue()
        self._ids = itertools.count(1)
        self._pieces: List[Piece] = []
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.state = TurnState.IDLE
        self.game_over = False
        self.selected_id: Optional[int] = None
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.game_over = False
        self.clear_selection()
        self.generate_piece_set()

    @property
    def offered(self) -> Tuple[Piece, ...]:
        return tuple(self._pieces)

    def generate_piece_set(self) -> List[Piece]:
        self._pieces = generate_piece_set(self.rng, self._ids, self.config.pieces_per_set)
        logger.debug("offering %s", [p.kind.name for p in self._pieces])
        self.bus.emit(EVENT_PIECES_REFILLED, piece_ids=[p.piece_id for p in self._pieces])
        return list(self._pieces)

    def piece(self, piece_id: int) -> Piece:
        for p in self._pieces:
            if p.piece_id == piece_id:
                return p
        raise InvalidSelection(f"piece {piece_id} is not on offer")

    # Selection

    def select_piece(self, index: int) -> int:
        if not 0 <= index < len(self._pieces):
            raise InvalidSelection(f"no offered piece at index {index}")
        piece = self._pieces[index]
        self.selected_id = piece.piece_id
        self.state = TurnState.SELECTED
        self.bus.emit(EVENT_PIECE_SELECTED, piece_id=piece.piece_id, index=index)
        return piece.piece_id

    def clear_selection(self) -> None:
        self.selected_id = None
        self.state = TurnState.IDLE

    @property
    def selected_piece(self) -> Optional[Piece]:
        if self.selected_id is None:
            return None
        return self.piece(self.selected_id)

    # Core operations

    def can_place(self, piece: Piece, col: int, row: int) -> bool:
        return self.grid.can_place(piece, col, row)

    def place(self, piece: Piece, col: int, row: int) -> int:
        return self.grid.place(piece, col, row)

    def clear_lines(self) -> ClearResult:
        result = self.grid.clear_lines()
        if result.lines_cleared > 0:
            self.score += self.rules.score_for_lines(result.lines_cleared)
            self.lines_cleared_total += result.lines_cleared
            self.fades.push(result.cleared_cells)
            logger.info("cleared %d line(s), score %d", result.lines_cleared, self.score)
            self.bus.emit(
                EVENT_LINES_CLEARED,
                lines=result.lines_cleared,
                cleared_cells=list(result.cleared_cells),
                score=self.score,
            )
        return result

    def is_game_over(self) -> bool:
        return not any(self.grid.fits_anywhere(p) for p in self._pieces)

    def attempt_placement(self, piece_id: int, col: int, row: int) -> PlacementOutcome:
        """Run one turn: validate, place, refill, clear lines, check game over.

        The selection is cleared whether or not the piece fits.
        """
        try:
            piece = self.piece(piece_id)
        finally:
            self.clear_selection()

        if not self.can_place(piece, col, row):
            logger.debug("rejected piece %d at (%d, %d)", piece_id, col, row)
            self.bus.emit(EVENT_PLACEMENT_REJECTED, piece_id=piece_id, col=col, row=row)
            return PlacementOutcome(placed=False)

        cells = self.place(piece, col, row)
        self.pieces_placed += 1
        self._pieces.remove(piece)
        logger.debug("placed %s (%d) at (%d, %d)", piece.kind.name, piece_id, col, row)
        self.bus.emit(EVENT_PIECE_PLACED, piece_id=piece_id, col=col, row=row, cells=cells)
        if not self._pieces:
            self.generate_piece_set()

        before = self.score
        result = self.clear_lines()
        outcome = PlacementOutcome(
            placed=True,
            lines_cleared=result.lines_cleared,
            score_delta=self.score - before,
            cleared_cells=result.cleared_cells,
        )

        if self.is_game_over():
            outcome.game_over = True
            outcome.final_score = self.score
            logger.info("game over, final score %d", self.score)
            self.game_over = True
            self.bus.emit(EVENT_GAME_OVER, final_score=self.score)
            if self.auto_reset:
                self.reset()
        return outcome

    def get_state(self) -> Dict[str, Any]:
        return {
            "grid": self.grid.clone_state(),
            "pieces": [int(p.kind) for p in self._pieces],
            "piece_ids": [p.piece_id for p in self._pieces],
            "pieces_remaining": len(self._pieces),
            "score": self.score,
            "lines_cleared_total": self.lines_cleared_total,
            "pieces_placed": self.pieces_placed,
            "game_over": self.game_over,
            "state": self.state.value,
            "selected_id": self.selected_id,
        }

    snapshot = get_state
