"""Gymnasium environments for block-grid."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Default 600x440 board at 40px cells
register(
    id="BlockGrid-15x11-v0",
    entry_point="block_grid.env.block_grid_env:BlockGridEnv",
)

__all__ = ["BlockGrid-15x11-v0"]
