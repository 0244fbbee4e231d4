from typing import List, Tuple

from .board import BoardModel, make_board
from .elements import Element
from .errors import MalformedBoard
from .state import DynamicState

SEP = "|"

# XSB level tokens
TOK_WALL = "#"
TOK_GOAL = "."
TOK_BOX = "$"
TOK_BOX_ON_GOAL = "*"
TOK_PLAYER = "@"
TOK_PLAYER_ON_GOAL = "+"
TOK_FLOOR = (" ", "-", "_")

_XSB_TO_ELEMENT = {
    TOK_WALL: Element.WALL,
    TOK_GOAL: Element.GOAL,
    TOK_BOX: Element.BOX,
    TOK_BOX_ON_GOAL: Element.BOX_ON_GOAL,
    TOK_PLAYER: Element.AGENT,
    TOK_PLAYER_ON_GOAL: Element.AGENT_ON_GOAL,
}

_AGENT_CODES = (Element.AGENT, Element.AGENT_ON_GOAL)
_BOX_CODES = (Element.BOX, Element.BOX_ON_GOAL)
_GOAL_CODES = (Element.GOAL, Element.AGENT_ON_GOAL, Element.BOX_ON_GOAL)


def _tokens(board_str: str) -> List[int]:
    segs = [seg.strip() for seg in board_str.strip().split(SEP)]
    # tolerate "|3|3|...|" as written by older board files
    if segs and segs[0] == "":
        segs = segs[1:]
    if segs and segs[-1] == "":
        segs = segs[:-1]
    for seg in segs:
        # int() would also take "1_0", "+3" or non-ASCII digits
        if not (seg.isascii() and seg.isdigit()):
            raise MalformedBoard(f"Non-integer token in board string: {seg!r}")
    return [int(seg) for seg in segs]


def parse_board_str(board_str: str, seed: int = 0) -> Tuple[BoardModel, DynamicState]:
    """Parses "<rows>|<cols>|<code_0>|...|<code_{rows*cols-1}>" into board and initial state.

    Codes: 0 agent, 1 wall, 2 box, 3 goal, 4 empty, 5 agent on goal, 6 box on goal.
    Boxes get their ids in row-major scan order.
    """
    toks = _tokens(board_str)
    if len(toks) < 2:
        raise MalformedBoard("Board string needs at least rows and cols")
    rows, cols = toks[0], toks[1]
    if rows < 1 or cols < 1:
        raise MalformedBoard(f"Invalid board dimensions: {rows}x{cols}")
    codes = toks[2:]
    if len(codes) != rows * cols:
        raise MalformedBoard(
            f"Missmatch in board elements: expected {rows * cols}, got {len(codes)}")

    terrain: List[int] = []
    boxes: List[int] = []
    agents: List[int] = []
    goal_count = 0
    for idx, code in enumerate(codes):
        if not 0 <= code < len(Element):
            raise MalformedBoard(f"Unknown element type: {code}")
        el = Element(code)
        if el in _AGENT_CODES:
            agents.append(idx)
        if el in _BOX_CODES:
            boxes.append(idx)
        if el in _GOAL_CODES:
            goal_count += 1
            terrain.append(Element.GOAL)
        elif el == Element.WALL:
            terrain.append(Element.WALL)
        else:
            terrain.append(Element.EMPTY)

    if not agents:
        raise MalformedBoard("Agent element not found")
    if len(agents) > 1:
        raise MalformedBoard(f"Too many agent elements, expected only one (got {len(agents)})")
    if len(boxes) != goal_count:
        raise MalformedBoard(
            f"Missmatch in number of boxes and goals: {len(boxes)} boxes, {goal_count} goals")

    board = make_board(rows, cols, terrain, seed)
    state = DynamicState(agent=agents[0], boxes=boxes)
    state.hash = board.zobrist.hash(board.terrain, state.agent, state.boxes)
    return board, state


def to_board_str(board: BoardModel, state: DynamicState) -> str:
    """Inverse of parse_board_str (codes are written zero-padded)."""
    out = [str(board.rows), str(board.cols)]
    for idx, el in enumerate(board.terrain):
        on_goal = el == Element.GOAL
        if idx == state.agent:
            code = Element.AGENT_ON_GOAL if on_goal else Element.AGENT
        elif state.has_box(idx):
            code = Element.BOX_ON_GOAL if on_goal else Element.BOX
        else:
            code = el
        out.append(f"{int(code):02d}")
    return SEP.join(out)


def xsb_to_board_str(level_str: str) -> str:
    """Converts an ASCII (XSB) level into the board string encoding.

    Supported characters:
      '#': wall
      '.': goal
      '$': box
      '*': box on goal
      '@': player
      '+': player on goal
      ' ', '-', '_': floor
    Short lines are padded with floor on the right.
    """
    lines = [line.rstrip("\n") for line in level_str.splitlines() if line.strip() != ""]
    if not lines:
        raise MalformedBoard("Empty level")
    rows = len(lines)
    cols = max(len(line) for line in lines)
    lines = [line.ljust(cols, TOK_FLOOR[0]) for line in lines]

    out = [str(rows), str(cols)]
    for r, line in enumerate(lines):
        for c, ch in enumerate(line):
            if ch in TOK_FLOOR:
                el = Element.EMPTY
            elif ch in _XSB_TO_ELEMENT:
                el = _XSB_TO_ELEMENT[ch]
            else:
                raise MalformedBoard(f"Unknown level character {ch!r} at row {r}, col {c}")
            out.append(f"{int(el):02d}")
    return SEP.join(out)


def parse_level_str(level_str: str, seed: int = 0) -> Tuple[BoardModel, DynamicState]:
    return parse_board_str(xsb_to_board_str(level_str), seed)


def parse_level_file(path: str, seed: int = 0) -> Tuple[BoardModel, DynamicState]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_level_str(f.read(), seed)
