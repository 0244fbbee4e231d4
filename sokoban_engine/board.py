from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from .bits import has_bit, set_bit
from .elements import Element
from .reachability import goal_reach_table
from .zobrist import Zobrist

__all__ = ["BoardModel", "make_board"]


@dataclass(frozen=True, slots=True, eq=False)
class BoardModel:
    """
    Immutable static layout of a Sokoban level.

    Shared by reference between every DynamicState of an episode (and their
    copies); nothing mutates it after make_board().
    Cell indexing: idx = r*cols + c.
    """

    rows: int
    cols: int
    seed: int
    terrain: Tuple[int, ...] # Element.WALL / GOAL / EMPTY per cell
    walls: int # bitset
    goals: int # bitset
    goal_cells: Tuple[int, ...]
    zobrist: Zobrist
    static_hash: int # XOR of the wall and goal terms
    goal_reach: Dict[int, int] # goal idx -> bitset of cells a box can be pushed from
    live_cells: int # union of goal_reach

    @property
    def cells(self) -> int:
        return self.rows * self.cols

    def same_layout(self, other: BoardModel) -> bool:
        return self.rows == other.rows and self.cols == other.cols and self.terrain == other.terrain

    # ---- convenient checks/conversions
    def idx_to_rc(self, idx: int) -> Tuple[int, int]:
        return (idx // self.cols, idx % self.cols)


    def rc_to_idx(self, r: int, c: int) -> int:
        return r * self.cols + c


    def is_wall(self, idx: int) -> bool:
        return has_bit(self.walls, idx)


    def is_goal_cell(self, idx: int) -> bool:
        return has_bit(self.goals, idx)


def make_board(rows: int, cols: int, terrain: Sequence[int], seed: int = 0) -> BoardModel:
    """Builds the board plus everything derived from it: hash basis and goal reachability."""
    terrain = tuple(int(el) for el in terrain)
    walls = goals = 0
    goal_cells = []
    for idx, el in enumerate(terrain):
        if el == Element.WALL:
            walls = set_bit(walls, idx)
        elif el == Element.GOAL:
            goals = set_bit(goals, idx)
            goal_cells.append(idx)

    zobrist = Zobrist(rows * cols, seed)
    reach, live = goal_reach_table(goal_cells, rows, cols, walls)
    return BoardModel(
        rows=rows,
        cols=cols,
        seed=seed,
        terrain=terrain,
        walls=walls,
        goals=goals,
        goal_cells=tuple(goal_cells),
        zobrist=zobrist,
        static_hash=zobrist.static_hash(terrain),
        goal_reach=reach,
        live_cells=live,
    )
