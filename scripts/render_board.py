"""
Render a board (optionally after a move sequence) to PNG and print it as ASCII.

Moves are given as a string over u/r/d/l (case-insensitive).

Run:
  python -m scripts.render_board \
    --config configs/engine.yaml \
    --moves dr \
    --out results/board.png
"""

from __future__ import annotations

import argparse
import os

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from sokoban_engine.config import load_config, GameParameters
from sokoban_engine.elements import Action
from sokoban_engine.game import SokobanGameState

MOVE_KEYS = {"u": Action.UP, "r": Action.RIGHT, "d": Action.DOWN, "l": Action.LEFT}


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--config", type=str, default=None, help="engine YAML")
    p.add_argument("--board", type=str, default=None, help="board string, overrides the config")
    p.add_argument("--moves", type=str, default="", help="moves to apply first, e.g. 'dr'")
    p.add_argument("--out", type=str, required=True, help="output PNG file")
    args = p.parse_args()

    params = load_config(args.config) if args.config else GameParameters()
    game = SokobanGameState(args.board, params=params)

    for ch in args.moves.lower():
        if ch not in MOVE_KEYS:
            raise SystemExit(f"unknown move: {ch!r} (use u/r/d/l)")
        game.apply_action(MOVE_KEYS[ch])

    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    plt.imsave(args.out, game.to_image())

    print(str(game))
    print(f"[INFO] hash={game.get_hash():#018x} solved={game.is_solution()} "
          f"deadlocked={game.is_deadlocked()}")
    print(f"[+] Saved {game.image_shape()} image → {args.out}")


if __name__ == "__main__":
    main()
