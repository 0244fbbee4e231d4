from __future__ import annotations
from typing import Tuple

import numpy as np

from .board import BoardModel
from .elements import (
    CHANNEL_AGENT_ON_GOAL,
    CHANNEL_BOX_ON_GOAL,
    NUM_CHANNELS,
    NUM_CHANNELS_COMPACT,
    Element,
)
from .state import DynamicState


def observation_shape(board: BoardModel, compact: bool = True) -> Tuple[int, int, int]:
    """CHW shape of get_observation()."""
    channels = NUM_CHANNELS_COMPACT if compact else NUM_CHANNELS
    return (channels, board.rows, board.cols)


def _compact(board: BoardModel, state: DynamicState) -> np.ndarray:
    obs = np.zeros((NUM_CHANNELS_COMPACT, board.cells), dtype=np.float32)
    terrain = np.asarray(board.terrain)
    obs[Element.WALL, terrain == Element.WALL] = 1.0
    obs[Element.GOAL, terrain == Element.GOAL] = 1.0
    obs[Element.AGENT, state.agent] = 1.0
    if state.boxes:
        obs[Element.BOX, list(state.boxes)] = 1.0
    return obs


def _expanded(board: BoardModel, state: DynamicState) -> np.ndarray:
    """One channel per cell: agent/box preempt the floor they stand on."""
    obs = np.zeros((NUM_CHANNELS, board.cells), dtype=np.float32)
    for idx, el in enumerate(board.terrain):
        on_goal = el == Element.GOAL
        if idx == state.agent:
            ch = CHANNEL_AGENT_ON_GOAL if on_goal else Element.AGENT
        elif state.has_box(idx):
            ch = CHANNEL_BOX_ON_GOAL if on_goal else Element.BOX
        else:
            ch = el
        obs[int(ch), idx] = 1.0
    return obs


def get_observation(board: BoardModel, state: DynamicState, compact: bool = True) -> np.ndarray:
    """Binary channel tensor of shape observation_shape(board, compact).

    compact: 4 channels (agent, wall, box, goal), overlaps allowed.
    expanded: 7 channels (agent, wall, box, goal, empty, agent on goal, box on goal),
    exactly one set per cell.
    """
    flat = _compact(board, state) if compact else _expanded(board, state)
    return flat.reshape(observation_shape(board, compact))
