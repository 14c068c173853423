from typing import Dict

from blinker import Signal


class EventBus:
    """Simple event bus leveraging blinker Signal objects."""

    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references, so lambdas and bound methods stay connected.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


EVENT_PIECE_SELECTED = "piece_selected"          # payload: piece_id=int, index=int
EVENT_PIECE_PLACED = "piece_placed"              # payload: piece_id=int, col=int, row=int, cells=int
EVENT_PLACEMENT_REJECTED = "placement_rejected"  # payload: piece_id=int, col=int, row=int
EVENT_PIECES_REFILLED = "pieces_refilled"        # payload: piece_ids=list[int]
EVENT_LINES_CLEARED = "lines_cleared"            # payload: lines=int, cleared_cells=list[ClearedCell], score=int
EVENT_GAME_OVER = "game_over"                    # payload: final_score=int
