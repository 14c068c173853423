from __future__ import annotations

from typing import Optional, Tuple

import pygame

from block_grid.game import EventBus, GameConfig, PuzzleEngine
from block_grid.game.events import EVENT_GAME_OVER
from .layout import Layout
from .renderer import Renderer


GAME_OVER_MS = 2500


class _Hold:
    """The piece currently picked up from the preview panel."""

    def __init__(self, slot: int, piece_id: int, grab_dx: int, grab_dy: int) -> None:
        self.slot = slot
        self.piece_id = piece_id
        self.grab_dx = grab_dx
        self.grab_dy = grab_dy


class _Banner:
    """Transient message drawn under the score, such as the final score."""

    def __init__(self) -> None:
        self.text: Optional[str] = None
        self.until = 0

    def show(self, text: str, now: int, duration: int = GAME_OVER_MS) -> None:
        self.text = text
        self.until = now + duration

    def visible(self, now: int) -> bool:
        return self.text is not None and now < self.until


def run(config: Optional[GameConfig] = None, cell_size: int = 40, fps: int = 60) -> None:
    pygame.init()
    try:
        bus = EventBus()
        engine = PuzzleEngine(config, bus=bus)
        layout = Layout.for_config(engine.config, cell_size=cell_size)
        renderer = Renderer(layout)
        screen = pygame.display.set_mode(layout.window_size)
        pygame.display.set_caption("Block Grid")

        banner = _Banner()

        def on_game_over(sender, final_score: int, **_) -> None:
            banner.show(f"Game over! Score: {final_score}", pygame.time.get_ticks())

        bus.subscribe(EVENT_GAME_OVER, on_game_over)

        hold: Optional[_Hold] = None
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    mx, my = event.pos
                    hit = layout.preview_hit(mx, my, engine.offered)
                    if hit is not None:
                        slot, dx, dy = hit
                        hold = _Hold(slot, engine.select_piece(slot), dx, dy)
                    elif hold is not None and layout.on_board(mx, my):
                        col, row = layout.drop_origin(mx, my, hold.grab_dx, hold.grab_dy)
                        engine.attempt_placement(hold.piece_id, col, row)
                        hold = None

            held: Optional[Tuple[int, Tuple[int, int], bool]] = None
            if hold is not None:
                mx, my = pygame.mouse.get_pos()
                origin = layout.drop_origin(mx, my, hold.grab_dx, hold.grab_dy)
                piece = engine.offered[hold.slot]
                held = (hold.slot, origin, engine.can_place(piece, *origin))

            renderer.draw(screen, engine, held)
            engine.fades.tick()
            lines = [f"Score: {engine.score}"]
            if banner.visible(pygame.time.get_ticks()):
                lines.append(banner.text)
            _, height = layout.window_size
            renderer.draw_text(screen, lines, (layout.panel_x, height - 60))

            pygame.display.flip()
            clock.tick(fps)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
