from __future__ import annotations
from typing import Optional, Tuple

import numpy as np

from .board import BoardModel
from .elements import FLAGS_TO_STR, Element
from .sprites import SpriteTable, default_sprites, validate_sprites
from .state import DynamicState


def cell_flags(board: BoardModel, state: DynamicState, idx: int) -> int:
    """Bit-flag combination (1 << Element) of agent/wall/goal/box on one cell."""
    flags = 0
    if idx == state.agent:
        flags |= 1 << Element.AGENT
    if board.is_wall(idx):
        flags |= 1 << Element.WALL
    if board.is_goal_cell(idx):
        flags |= 1 << Element.GOAL
    if state.has_box(idx):
        flags |= 1 << Element.BOX
    return flags


def render_ascii(board: BoardModel, state: DynamicState) -> str:
    """ASCII visualization of the state."""
    out_lines = []
    for r in range(board.rows):
        row_chars = []
        for c in range(board.cols):
            row_chars.append(FLAGS_TO_STR[cell_flags(board, state, r * board.cols + c)])
        out_lines.append(''.join(row_chars))
    return "\n".join(out_lines)


def image_shape(board: BoardModel, sprites: Optional[SpriteTable] = None) -> Tuple[int, int, int]:
    sprites = default_sprites() if sprites is None else sprites
    h, w, ch = validate_sprites(sprites)
    return (board.rows * h, board.cols * w, ch)


def to_image(board: BoardModel, state: DynamicState, sprites: Optional[SpriteTable] = None) -> np.ndarray:
    """HWC uint8 image: every cell is the sprite keyed by its flag combination."""
    sprites = default_sprites() if sprites is None else sprites
    h, w, ch = validate_sprites(sprites)
    img = np.zeros((board.rows * h, board.cols * w, ch), dtype=np.uint8)
    for r in range(board.rows):
        for c in range(board.cols):
            tile = sprites[cell_flags(board, state, r * board.cols + c)]
            img[r * h:(r + 1) * h, c * w:(c + 1) * w] = tile
    return img
