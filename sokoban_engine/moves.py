from typing import List

from .board import BoardModel
from .elements import ACTION_OFFSETS, ALL_ACTIONS, Action, Element, RewardCode
from .state import DynamicState

__all__ = [
    "index_from_action",
    "in_bounds",
    "is_traversible",
    "is_pushable",
    "move_agent",
    "push",
    "apply_action",
    "legal_actions",
]


def index_from_action(board: BoardModel, idx: int, action: Action) -> int:
    """Cell one step from `idx` in the action's direction. Caller checks in_bounds first."""
    dc, dr = ACTION_OFFSETS[action]
    return idx + dr * board.cols + dc


def in_bounds(board: BoardModel, idx: int, action: Action) -> bool:
    dc, dr = ACTION_OFFSETS[action]
    r, c = divmod(idx, board.cols)
    r += dr
    c += dc
    return 0 <= r < board.rows and 0 <= c < board.cols


def is_traversible(board: BoardModel, state: DynamicState, idx: int, action: Action) -> bool:
    """Next cell from `idx` is inside the board, not a wall and not a box."""
    if not in_bounds(board, idx, action):
        return False
    nxt = index_from_action(board, idx, action)
    return not board.is_wall(nxt) and not state.has_box(nxt)


def is_pushable(board: BoardModel, state: DynamicState, idx: int, action: Action) -> bool:
    """Next cell from `idx` holds a box and the cell past it is traversible."""
    if not in_bounds(board, idx, action):
        return False
    box_idx = index_from_action(board, idx, action)
    if not state.has_box(box_idx):
        return False
    return is_traversible(board, state, box_idx, action)


def move_agent(board: BoardModel, state: DynamicState, action: Action) -> None:
    z = board.zobrist
    state.hash ^= z.key(Element.AGENT, state.agent)
    state.agent = index_from_action(board, state.agent, action)
    state.hash ^= z.key(Element.AGENT, state.agent)


def _move_box(board: BoardModel, state: DynamicState, box_idx: int, action: Action) -> None:
    z = board.zobrist
    new_idx = index_from_action(board, box_idx, action)
    state.hash ^= z.key(Element.BOX, box_idx)
    state.move_box(state.box_id_at(box_idx), new_idx)
    state.hash ^= z.key(Element.BOX, new_idx)

    if board.is_goal_cell(new_idx):
        signal = RewardCode.BOX_IN_GOAL
        if all(board.is_goal_cell(b) for b in state.boxes):
            signal |= RewardCode.ALL_BOXES_IN_GOAL
        state.reward_signal = int(signal)
    else:
        state.reward_signal = 0


def push(board: BoardModel, state: DynamicState, action: Action) -> None:
    """Box in front of the agent moves one step, then the agent follows into its old cell."""
    _move_box(board, state, index_from_action(board, state.agent, action), action)
    move_agent(board, state, action)


def apply_action(board: BoardModel, state: DynamicState, action: Action) -> None:
    """Applies one move in place. Illegal moves leave the state untouched apart from
    the cleared reward signal."""
    state.reward_signal = 0
    agent = state.agent
    if not in_bounds(board, agent, action):
        return
    if is_traversible(board, state, agent, action):
        move_agent(board, state, action)
    elif is_pushable(board, state, agent, action):
        push(board, state, action)


def legal_actions(board: BoardModel, state: DynamicState) -> List[Action]:
    """Every direction is accepted; blocked ones are no-ops."""
    return list(ALL_ACTIONS)
