"""
Validate board files before handing them to the engine.

Inputs (any mix):
  --list   text files with one board string per line ("rows|cols|codes...");
           blank lines and lines starting with '#' are ignored
  --xsb    directories of .txt files with ASCII (XSB) levels separated by blank lines;
           lines starting with ';' are comments

Every board is parsed; with --check_deadlock boards that are already known
deadlocks in their initial state are reported too.

Example usage:
  python -m scripts.validate_boards \
    --config configs/engine.yaml \
    --list data/boards/train.list \
    --xsb data/levels/examples \
    --check_deadlock \
    --jobs 4
"""

from __future__ import annotations

import argparse
import os
from multiprocessing import Pool, cpu_count
from typing import Iterator, List, Tuple

from tqdm import tqdm

from sokoban_engine.config import load_config, GameParameters
from sokoban_engine.deadlocks import has_deadlock
from sokoban_engine.errors import MalformedBoard
from sokoban_engine.parser import parse_board_str, xsb_to_board_str


def _split_on_blank_lines(text: str) -> List[str]:
    blocks: List[str] = []
    cur: List[str] = []
    for line in text.splitlines():
        if line.lstrip().startswith(";"):
            continue
        if line.strip() == "":
            if cur:
                blocks.append("\n".join(cur))
                cur = []
        else:
            cur.append(line)
    if cur:
        blocks.append("\n".join(cur))
    return blocks


def iterate_board_lists(paths: List[str]) -> Iterator[Tuple[str, str, str]]:
    """Yields (ref, kind, text) for every board line; ref is path#line."""
    for path in paths:
        with open(path, "r", encoding="utf-8") as f:
            for i, ln in enumerate(f):
                ln = ln.strip()
                if not ln or ln.startswith("#"):
                    continue
                yield f"{path}#{i}", "board", ln


def iterate_xsb_dirs(dirs: List[str]) -> Iterator[Tuple[str, str, str]]:
    """Yields (ref, kind, text) for every level block of every .txt file; ref is path#index."""
    for d in dirs:
        if not os.path.isdir(d):
            print(f"Warning: not a directory: {d}")
            continue
        for fname in sorted(os.listdir(d)):
            if not fname.endswith(".txt"):
                continue
            fpath = os.path.join(d, fname)
            with open(fpath, "r", encoding="utf-8") as f:
                blocks = _split_on_blank_lines(f.read())
            for i, block in enumerate(blocks):
                yield f"{fpath}#{i}", "xsb", block


def _check_one(args_tuple) -> Tuple[str, str]:
    """Returns (ref, "") when valid, else (ref, reason)."""
    ref, kind, text, seed, check_deadlock = args_tuple
    try:
        board_str = xsb_to_board_str(text) if kind == "xsb" else text
        board, state = parse_board_str(board_str, seed)
    except MalformedBoard as e:
        return ref, str(e)
    if check_deadlock and has_deadlock(board, state):
        return ref, "deadlocked in the initial state"
    return ref, ""


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--config", type=str, default=None, help="engine YAML (for rng_seed)")
    p.add_argument("--list", nargs="*", default=[], help="files with one board string per line")
    p.add_argument("--xsb", nargs="*", default=[], help="directories with XSB level files")
    p.add_argument("--check_deadlock", action="store_true", help="also reject initial deadlocks")
    p.add_argument("--jobs", type=int, default=1, help="processes (0→cpu_count)")
    args = p.parse_args()

    params = load_config(args.config) if args.config else GameParameters()
    items = list(iterate_board_lists(args.list)) + list(iterate_xsb_dirs(args.xsb))
    if not items:
        print("[INFO] nothing to validate")
        return
    payload = [(ref, kind, text, params.rng_seed, args.check_deadlock) for ref, kind, text in items]

    jobs = args.jobs or cpu_count()
    if jobs == 1:
        results = [_check_one(t) for t in tqdm(payload, desc="Validating boards", unit="board")]
    else:
        with Pool(processes=jobs) as pool:
            results = list(tqdm(pool.imap(_check_one, payload), total=len(payload), desc="Validating boards", unit="board"))

    ok = 0
    bad = 0
    for ref, reason in results:
        if reason:
            bad += 1
            print(f"[skip] {ref}: {reason}")
        else:
            ok += 1
    print(f"valid: {ok}, skipped: {bad}")


if __name__ == "__main__":
    main()
