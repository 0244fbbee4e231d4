from __future__ import annotations
import json
from typing import Dict, Tuple

from .board import BoardModel, make_board
from .elements import Element
from .errors import MalformedBoard
from .state import DynamicState

_FIELDS = ("rows", "cols", "seed", "agent", "hash", "reward_signal", "terrain", "is_box")
_TERRAIN_CODES = (int(Element.WALL), int(Element.GOAL), int(Element.EMPTY))


def state_to_dict(board: BoardModel, state: DynamicState) -> Dict[str, object]:
    box_set = state.box_set
    return {
        "rows": int(board.rows),
        "cols": int(board.cols),
        "seed": int(board.seed),
        "agent": int(state.agent),
        "hash": int(state.hash),
        "reward_signal": int(state.reward_signal),
        "terrain": [int(el) for el in board.terrain],
        "is_box": [1 if idx in box_set else 0 for idx in range(board.cells)],
    }


def dict_to_state(rec: Dict) -> Tuple[BoardModel, DynamicState]:
    """Rebuilds board and state; the hash basis is regenerated from the stored seed."""
    missing = [k for k in _FIELDS if k not in rec]
    if missing:
        raise MalformedBoard(f"Snapshot misses fields: {missing}")
    try:
        rows = int(rec["rows"])
        cols = int(rec["cols"])
        seed = int(rec["seed"])
        agent = int(rec["agent"])
        terrain = [int(el) for el in rec["terrain"]]
        is_box = [int(b) for b in rec["is_box"]]
        stored_hash = int(rec["hash"])
        reward_signal = int(rec["reward_signal"])
    except (TypeError, ValueError) as e:
        raise MalformedBoard(f"Invalid snapshot field: {e}") from None
    if rows < 1 or cols < 1:
        raise MalformedBoard(f"Invalid board dimensions: {rows}x{cols}")
    size = rows * cols
    if len(terrain) != size or len(is_box) != size:
        raise MalformedBoard("Snapshot terrain/box arrays don't match the board size")
    if any(el not in _TERRAIN_CODES for el in terrain):
        raise MalformedBoard("Snapshot terrain holds non-terrain codes")
    if not 0 <= agent < size or terrain[agent] == Element.WALL:
        raise MalformedBoard(f"Invalid agent cell: {agent}")

    boxes = [idx for idx, b in enumerate(is_box) if b]
    if any(terrain[b] == Element.WALL for b in boxes) or agent in boxes:
        raise MalformedBoard("Box placed on a wall or on the agent")
    if len(boxes) != terrain.count(Element.GOAL):
        raise MalformedBoard("Missmatch in number of boxes and goals")

    board = make_board(rows, cols, terrain, seed)
    state = DynamicState(agent=agent, boxes=boxes, reward_signal=reward_signal)
    state.hash = board.zobrist.hash(board.terrain, agent, boxes)
    if state.hash != stored_hash:
        raise MalformedBoard("Snapshot hash does not match the rebuilt state")
    return board, state


def serialize(board: BoardModel, state: DynamicState) -> bytes:
    return json.dumps(state_to_dict(board, state), separators=(",", ":")).encode("utf-8")


def deserialize(data: bytes) -> Tuple[BoardModel, DynamicState]:
    try:
        rec = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedBoard(f"Unreadable snapshot: {e}") from None
    if not isinstance(rec, dict):
        raise MalformedBoard("Snapshot must be a JSON object")
    return dict_to_state(rec)
