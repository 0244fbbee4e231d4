from __future__ import annotations
from typing import List, Tuple
from collections import OrderedDict

from .bits import has_bit, set_bit
from .board import BoardModel
from .elements import ALL_ACTIONS, Action
from .goal_check import unsolved_box_cells
from .moves import apply_action
from .state import DynamicState

# Simple LRU cache for deadlock checks keyed by (boxes, walls, goals, cols, rows)
_DEADLOCK_CACHE: "OrderedDict[Tuple[int, int, int, int, int], bool]" = OrderedDict()
_DEADLOCK_CACHE_MAX = 200000

# --- low-level helpers -------------------------------------------------------

def _is_wall_like(board: BoardModel, idx: int) -> bool:
    """Treat outside the board (idx == -1) as a wall."""
    return idx == -1 or board.is_wall(idx)


def _is_solid(board: BoardModel, state: DynamicState, idx: int) -> bool:
    """Wall, outside the board or box: the agent can't stand there."""
    return _is_wall_like(board, idx) or state.has_box(idx)


def _around(board: BoardModel, idx: int) -> Tuple[int, int, int, int]:
    """(up, down, left, right) neighbors, -1 where the board ends."""
    w = board.cols
    size = board.cells
    up = idx - w if idx >= w else -1
    down = idx + w if idx + w < size else -1
    left = idx - 1 if idx % w != 0 else -1
    right = idx + 1 if idx % w != w - 1 else -1
    return up, down, left, right


def _box_mask(state: DynamicState) -> int:
    mask = 0
    for b in state.box_set:
        mask = set_bit(mask, b)
    return mask

# --- individual deadlock rules ----------------------------------------------

def is_goal_unreachable_deadlock(board: BoardModel, state: DynamicState) -> bool:
    """Static push reachability can't match boxes to goals.

    Two checks, both needed:
      - an empty goal whose reach set holds no off-goal box,
      - an off-goal box that lies in no goal's reach set.
    A goal emptied later is refilled through a chain of goals that ends in an
    off-goal box, and reach sets are transitive, so the first check is safe.
    """
    unsolved = 0
    for b in unsolved_box_cells(board, state):
        if not has_bit(board.live_cells, b):
            return True
        unsolved = set_bit(unsolved, b)
    if unsolved == 0:
        return False
    for g in board.goal_cells:
        if state.has_box(g):
            continue
        if board.goal_reach[g] & unsolved == 0:
            return True
    return False


def is_corner_deadlock(board: BoardModel, state: DynamicState, box_idx: int) -> bool:
    """Box (not on goal) in a corner of two walls/outside the board."""
    if board.is_goal_cell(box_idx):
        return False
    up, down, left, right = _around(board, box_idx)

    def wall(i: int) -> bool:
        return _is_wall_like(board, i)

    return (wall(up) and wall(left)) or (wall(up) and wall(right)) \
        or (wall(down) and wall(left)) or (wall(down) and wall(right))


def is_diagonal_pair_deadlock(board: BoardModel, state: DynamicState, box_idx: int) -> bool:
    """Two diagonal boxes whose bridging cells are walls or boxes.

    The four cells form a 2x2 block where every box has a solid neighbor in
    both axes inside the block, so none of them can ever move. Deadlock if
    any box in that block is off-goal.
    """
    w = board.cols
    h = board.rows
    r, c = board.idx_to_rc(box_idx)
    for dr, dc in ((-1, -1), (-1, 1), (1, -1), (1, 1)):
        rr, cc = r + dr, c + dc
        if not (0 <= rr < h and 0 <= cc < w):
            continue
        other = rr * w + cc
        if not state.has_box(other):
            continue
        bridge_a = r * w + cc
        bridge_b = rr * w + c
        if not (_is_solid(board, state, bridge_a) and _is_solid(board, state, bridge_b)):
            continue
        for x in (box_idx, other, bridge_a, bridge_b):
            if state.has_box(x) and not board.is_goal_cell(x):
                return True
    return False


def is_wall_pair_deadlock(board: BoardModel, state: DynamicState, box_idx: int) -> bool:
    """Two adjacent boxes backed by walls on the same side.

    A horizontal pair with walls above both (or below both) can't move
    vertically, and each blocks the other horizontally. Same for vertical
    pairs against a left or right wall.
    """
    up, down, left, right = _around(board, box_idx)
    pairs = (
        (right, 0, 1),  # horizontal pair: compare up/down
        (down, 2, 3),   # vertical pair: compare left/right
    )
    for other, side_a, side_b in pairs:
        if other == -1 or not state.has_box(other):
            continue
        mine = (up, down, left, right)
        theirs = _around(board, other)
        for side in (side_a, side_b):
            if _is_wall_like(board, mine[side]) and _is_wall_like(board, theirs[side]):
                if not board.is_goal_cell(box_idx) or not board.is_goal_cell(other):
                    return True
    return False


# --- combined API ------------------------------------------------------------

def has_deadlock(board: BoardModel, state: DynamicState) -> bool:
    """Combines the deadlock rules; any one firing proves the state unsolvable."""
    boxes = _box_mask(state)
    key = (boxes, board.walls, board.goals, board.cols, board.rows)
    cached = _DEADLOCK_CACHE.get(key)
    if cached is not None:
        _DEADLOCK_CACHE.move_to_end(key)
        return cached

    deadlocked = is_goal_unreachable_deadlock(board, state)
    if not deadlocked:
        for b in state.boxes:
            if is_corner_deadlock(board, state, b) or \
               is_diagonal_pair_deadlock(board, state, b) or \
               is_wall_pair_deadlock(board, state, b):
                deadlocked = True
                break

    _DEADLOCK_CACHE[key] = deadlocked
    if len(_DEADLOCK_CACHE) > _DEADLOCK_CACHE_MAX:
        _DEADLOCK_CACHE.popitem(last=False)
    return deadlocked


def clear_deadlock_cache() -> None:
    _DEADLOCK_CACHE.clear()


def legal_actions_no_deadlocks(board: BoardModel, state: DynamicState) -> List[Action]:
    """Actions whose successor is not a known deadlock. The state itself is not touched."""
    actions: List[Action] = []
    for a in ALL_ACTIONS:
        child = state.copy()
        apply_action(board, child, a)
        if not has_deadlock(board, child):
            actions.append(a)
    return actions
