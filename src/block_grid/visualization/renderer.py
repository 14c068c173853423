from __future__ import annotations

from typing import Optional, Sequence, Tuple

import pygame

from block_grid.game import FadeQueue, Piece, rgb_color
from .layout import Layout


BACKGROUND = (15, 15, 20)
EMPTY_CELL = (40, 40, 48)
TEXT = (230, 230, 230)
INVALID = (220, 120, 120)


class Renderer:
    def __init__(self, layout: Layout) -> None:
        self.layout = layout
        self.font: Optional[pygame.font.Font] = None

    def _font(self) -> pygame.font.Font:
        if self.font is None:
            self.font = pygame.font.SysFont(None, 24)
        return self.font

    def draw_board(self, screen: pygame.Surface, grid) -> None:
        rows, cols = grid.shape
        for y in range(rows):
            for x in range(cols):
                v = int(grid[y, x])
                color = rgb_color(v) if v else EMPTY_CELL
                pygame.draw.rect(screen, color, pygame.Rect(*self.layout.cell_rect(x, y)))

    def draw_fades(self, screen: pygame.Surface, fades: FadeQueue) -> None:
        size = self.layout.cell_size - 1
        for entry in fades:
            cell = pygame.Surface((size, size), pygame.SRCALPHA)
            cell.fill((*rgb_color(entry.color), int(255 * entry.alpha)))
            x, y, _, _ = self.layout.cell_rect(entry.x, entry.y)
            screen.blit(cell, (x, y))

    def draw_pieces(self, screen: pygame.Surface, pieces: Sequence[Piece], held_slot: Optional[int]) -> None:
        cs = self.layout.cell_size
        for slot, piece in enumerate(pieces):
            if slot == held_slot:
                continue
            x0, y0, _, _ = self.layout.preview_rect(slot, piece)
            for py, px in zip(*piece.shape.nonzero()):
                rect = pygame.Rect(x0 + int(px) * cs, y0 + int(py) * cs, cs - 1, cs - 1)
                pygame.draw.rect(screen, rgb_color(piece.color), rect)

    def draw_held(self, screen: pygame.Surface, piece: Piece, origin: Tuple[int, int], valid: bool) -> None:
        color = rgb_color(piece.color) if valid else INVALID
        col, row = origin
        for x, y in piece.cells_at(col, row):
            pygame.draw.rect(screen, color, pygame.Rect(*self.layout.cell_rect(x, y)), 2)

    def draw_text(self, screen: pygame.Surface, lines: Sequence[str], pos: Tuple[int, int]) -> None:
        font = self._font()
        x, y = pos
        for i, txt in enumerate(lines):
            screen.blit(font.render(txt, True, TEXT), (x, y + i * 20))

    def draw(self, screen: pygame.Surface, engine, held: Optional[Tuple[int, Tuple[int, int], bool]] = None) -> None:
        screen.fill(BACKGROUND)
        self.draw_board(screen, engine.grid.cells)
        self.draw_fades(screen, engine.fades)
        held_slot = None
        if held is not None:
            held_slot, origin, valid = held
            self.draw_held(screen, engine.offered[held_slot], origin, valid)
        self.draw_pieces(screen, engine.offered, held_slot)
