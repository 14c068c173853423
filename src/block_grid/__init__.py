"""Block-placement puzzle: drop polyominoes on a grid, clear full rows and columns."""

__version__ = "0.1.0"
