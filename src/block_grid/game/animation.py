from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .grid import ClearedCell


FADE_STEP = 0.05


@dataclass
class FadeEntry:
    x: int
    y: int
    color: int
    alpha: float = 1.0


class FadeQueue:
    """Fade-out records for cleared cells.

    Entries are pushed by the engine when lines clear and decayed by the
    presentation loop once per frame. Nothing here touches the grid.
    """

    def __init__(self, step: float = FADE_STEP) -> None:
        self.step = float(step)
        self.entries: List[FadeEntry] = []

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def push(self, cells: Iterable[ClearedCell]) -> None:
        for cell in cells:
            self.entries.append(FadeEntry(cell.x, cell.y, cell.color))

    def tick(self) -> None:
        for entry in self.entries:
            entry.alpha = max(0.0, entry.alpha - self.step)
        # Round away float drift so twenty 0.05 steps land exactly on zero.
        self.entries = [e for e in self.entries if round(e.alpha, 9) > 0]

    def clear(self) -> None:
        self.entries.clear()
