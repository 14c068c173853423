from __future__ import annotations

import argparse
import logging

from block_grid.game import GameConfig


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="block-grid", description="Block-placement puzzle")
    p.add_argument("--width", type=int, default=600, help="Board width in pixels")
    p.add_argument("--height", type=int, default=440, help="Board height in pixels")
    p.add_argument("--cell-size", type=int, default=40)
    p.add_argument("--seed", type=int, default=None, help="RNG seed for piece generation")
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = GameConfig.from_canvas(args.width, args.height, args.cell_size, random_seed=args.seed)

    from block_grid.visualization.human_play import run

    run(config, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
