from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_grid.game import GameConfig, InvalidSelection, PuzzleEngine, rgb_color


def _valid_actions(engine: PuzzleEngine) -> List[Tuple[int, int, int]]:
    actions: List[Tuple[int, int, int]] = []
    for slot, piece in enumerate(engine.offered):
        for col, row in engine.grid.valid_origins(piece):
            actions.append((slot, col, row))
    return actions


def _compute_action_mask(engine: PuzzleEngine) -> np.ndarray:
    cfg = engine.config
    mask = np.zeros((cfg.pieces_per_set, cfg.cols, cfg.rows), dtype=np.bool_)
    for slot, col, row in _valid_actions(engine):
        mask[slot, col, row] = True
    return mask


class BlockGridEnv(gym.Env):
    """Agent-facing wrapper around `PuzzleEngine`.

    The engine does not reset itself on game over: the terminating step reports
    the final board and score, and `reset` starts the next game.

    Action is `(slot, col, row)`: the offered piece by its current slot and the
    grid origin to drop it at. Reward is the engine's score delta; invalid
    actions earn `invalid_action_penalty` and leave the board untouched.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        invalid_action_penalty: float = -1.0,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        self.engine = PuzzleEngine(config, auto_reset=False)
        self.render_mode = render_mode
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.max_episode_steps = int(max_episode_steps)

        cfg = self.engine.config
        k = cfg.pieces_per_set
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=6, shape=(cfg.rows, cfg.cols), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=6, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )
        self.action_space = spaces.MultiDiscrete((k, cfg.cols, cfg.rows))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        k = self.engine.config.pieces_per_set
        pieces = np.full((k,), -1, dtype=np.int8)
        for i, piece in enumerate(self.engine.offered[:k]):
            pieces[i] = int(piece.kind)
        return {
            "grid": self.engine.grid.clone_state(),
            "pieces": pieces,
            "pieces_remaining": len(self.engine.offered),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": self.get_action_mask(),
            "valid_actions": _valid_actions(self.engine),
            "score": self.engine.score,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.engine)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.engine.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        slot, col, row = map(int, action)
        if self.engine.game_over:
            raise RuntimeError("step called after the game ended; call reset()")
        self._steps += 1
        reward = 0.0
        terminated = False
        final_score = None

        try:
            piece_id = self.engine.select_piece(slot)
            outcome = self.engine.attempt_placement(piece_id, col, row)
        except InvalidSelection:
            outcome = None

        if outcome is None or not outcome.placed:
            reward = self.invalid_action_penalty
        else:
            reward = float(outcome.score_delta)
            terminated = outcome.game_over
            final_score = outcome.final_score

        truncated = not terminated and self._steps >= self.max_episode_steps
        info = self._get_info()
        info["placed"] = bool(outcome and outcome.placed)
        if final_score is not None:
            info["final_score"] = final_score
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.engine.grid.cells
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(grid[y, x])
                color = rgb_color(v) if v else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
