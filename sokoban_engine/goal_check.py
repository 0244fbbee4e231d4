from typing import List, Set

from .board import BoardModel
from .errors import UnknownBoxIdentity
from .state import DynamicState


def is_solution(board: BoardModel, state: DynamicState) -> bool:
    """All boxes are on goals."""
    return all(board.is_goal_cell(b) for b in state.boxes)


def unsolved_box_ids(board: BoardModel, state: DynamicState) -> Set[int]:
    return {i for i, b in enumerate(state.boxes) if not board.is_goal_cell(b)}


def solved_box_ids(board: BoardModel, state: DynamicState) -> Set[int]:
    return {i for i, b in enumerate(state.boxes) if board.is_goal_cell(b)}


def all_box_ids(state: DynamicState) -> Set[int]:
    return set(range(len(state.boxes)))


def box_index(state: DynamicState, box_id: int) -> int:
    if box_id < 0 or box_id >= len(state.boxes):
        raise UnknownBoxIdentity(box_id, len(state.boxes))
    return state.boxes[box_id]


def empty_goal_indices(board: BoardModel, state: DynamicState) -> Set[int]:
    return {g for g in board.goal_cells if not state.has_box(g)}


def solved_goal_indices(board: BoardModel, state: DynamicState) -> Set[int]:
    return {g for g in board.goal_cells if state.has_box(g)}


def all_goal_indices(board: BoardModel) -> Set[int]:
    return set(board.goal_cells)


def unsolved_box_cells(board: BoardModel, state: DynamicState) -> List[int]:
    return [b for b in state.boxes if not board.is_goal_cell(b)]
