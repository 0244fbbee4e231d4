from collections import deque
from typing import Dict, Iterable, Tuple

from .bits import has_bit, set_bit


def neighbors(idx: int, rows: int, cols: int) -> Iterable[int]:
    """4-neighborhood without diagonals."""
    r, c = divmod(idx, cols)
    if r > 0: yield idx - cols
    if r + 1 < rows: yield idx + cols
    if c > 0: yield idx - 1
    if c + 1 < cols: yield idx + 1


def _step(idx: int, dr: int, dc: int, rows: int, cols: int) -> int:
    """Cell one step away, or -1 when it falls off the board."""
    r, c = divmod(idx, cols)
    r += dr
    c += dc
    if 0 <= r < rows and 0 <= c < cols:
        return r * cols + c
    return -1


def box_reach_to(goal: int, rows: int, cols: int, walls: int) -> int:
    """Bitmask of cells from which a box can be pushed onto `goal`, ignoring other boxes.

    Reverse BFS from the goal: a box on `cur + d` can be pushed into `cur`
    only if the agent can stand on `cur + 2d`, so both cells must be inside
    the board and not walls.
    """
    visited = set_bit(0, goal)
    q = deque([goal])
    while q:
        cur = q.popleft()
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            src = _step(cur, dr, dc, rows, cols)
            if src == -1 or has_bit(walls, src) or has_bit(visited, src):
                continue
            stand = _step(src, dr, dc, rows, cols)
            if stand == -1 or has_bit(walls, stand):
                continue
            visited = set_bit(visited, src)
            q.append(src)
    return visited


def goal_reach_table(goal_cells: Iterable[int], rows: int, cols: int, walls: int) -> Tuple[Dict[int, int], int]:
    """Per-goal push reachability plus the union over all goals ("live" cells)."""
    table: Dict[int, int] = {}
    live = 0
    for g in goal_cells:
        mask = box_reach_to(g, rows, cols, walls)
        table[g] = mask
        live |= mask
    return table, live
