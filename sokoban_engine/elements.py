from enum import IntEnum, IntFlag
from typing import Dict, Tuple

__all__ = [
    "Element",
    "Action",
    "RewardCode",
    "ACTION_OFFSETS",
    "ALL_ACTIONS",
    "NUM_ACTIONS",
    "NUM_ELEMENTS",
    "NUM_CHANNELS_COMPACT",
    "NUM_CHANNELS",
    "CHANNEL_AGENT_ON_GOAL",
    "CHANNEL_BOX_ON_GOAL",
    "FLAGS_TO_STR",
]


class Element(IntEnum):
    """Element codes of the board string encoding.

    Agent..Empty double as hash kinds and observation channels.
    AgentOnGoal/BoxOnGoal only appear in board strings and expanded observations.
    """
    AGENT = 0
    WALL = 1
    BOX = 2
    GOAL = 3
    EMPTY = 4
    AGENT_ON_GOAL = 5
    BOX_ON_GOAL = 6


class Action(IntEnum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3


class RewardCode(IntFlag):
    NONE = 0
    BOX_IN_GOAL = 1 << 0
    ALL_BOXES_IN_GOAL = 1 << 1


NUM_ELEMENTS = 5  # hash kinds: Agent, Wall, Box, Goal, Empty
NUM_CHANNELS_COMPACT = 4
NUM_CHANNELS = 7
CHANNEL_AGENT_ON_GOAL = int(Element.AGENT_ON_GOAL)
CHANNEL_BOX_ON_GOAL = int(Element.BOX_ON_GOAL)

NUM_ACTIONS = 4
ALL_ACTIONS: Tuple[Action, ...] = (Action.UP, Action.RIGHT, Action.DOWN, Action.LEFT)

# (dcol, drow)
ACTION_OFFSETS: Dict[Action, Tuple[int, int]] = {
    Action.UP: (0, -1),
    Action.RIGHT: (1, 0),
    Action.DOWN: (0, 1),
    Action.LEFT: (-1, 0),
}


def _flag(*elements: Element) -> int:
    mask = 0
    for el in elements:
        mask |= 1 << int(el)
    return mask


# cell flag combination -> XSB symbol
FLAGS_TO_STR: Dict[int, str] = {
    0: " ",
    _flag(Element.AGENT): "@",
    _flag(Element.WALL): "#",
    _flag(Element.BOX): "$",
    _flag(Element.GOAL): ".",
    _flag(Element.AGENT, Element.GOAL): "+",
    _flag(Element.BOX, Element.GOAL): "*",
}
