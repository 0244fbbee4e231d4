"""Tests for the render module."""

import numpy as np
import pytest

from sokoban_engine.elements import Action
from sokoban_engine.moves import apply_action
from sokoban_engine.parser import parse_board_str
from sokoban_engine.render import image_shape, render_ascii, to_image
from sokoban_engine.sprites import AGENT, BOX, GOAL, REQUIRED_KEYS, WALL, default_sprites

BOARD = "2|3|1|1|1|0|2|3"


def test_render_ascii():
    board, state = parse_board_str(BOARD)
    assert render_ascii(board, state) == "###\n@$."
    apply_action(board, state, Action.RIGHT)
    assert render_ascii(board, state) == "###\n @*"


def test_render_agent_on_goal():
    board, state = parse_board_str("1|3|5|6|2")
    assert render_ascii(board, state) == "+*$"


def test_default_sprites_cover_all_keys():
    sprites = default_sprites()
    assert set(REQUIRED_KEYS) <= set(sprites)
    assert all(sprites[k].shape == (16, 16, 3) for k in REQUIRED_KEYS)
    assert all(sprites[k].dtype == np.uint8 for k in REQUIRED_KEYS)
    assert len({sprites[k].tobytes() for k in REQUIRED_KEYS}) == len(REQUIRED_KEYS)


def test_to_image_tiles():
    board, state = parse_board_str(BOARD)
    sprites = default_sprites()
    img = to_image(board, state)
    assert img.shape == image_shape(board) == (32, 48, 3)
    assert np.array_equal(img[0:16, 0:16], sprites[WALL])
    assert np.array_equal(img[16:32, 0:16], sprites[AGENT])
    assert np.array_equal(img[16:32, 16:32], sprites[BOX])
    assert np.array_equal(img[16:32, 32:48], sprites[GOAL])

    apply_action(board, state, Action.RIGHT)
    img = to_image(board, state)
    assert np.array_equal(img[16:32, 32:48], sprites[BOX | GOAL])


def test_custom_sprite_table():
    board, state = parse_board_str("1|3|5|6|2")
    table = {k: np.full((2, 3, 3), k, dtype=np.uint8) for k in REQUIRED_KEYS}
    img = to_image(board, state, table)
    assert img.shape == image_shape(board, table) == (2, 9, 3)
    assert (img[:, 0:3] == AGENT | GOAL).all()
    assert (img[:, 3:6] == BOX | GOAL).all()
    assert (img[:, 6:9] == BOX).all()


def test_incomplete_sprite_table_rejected():
    board, state = parse_board_str(BOARD)
    table = {k: np.zeros((2, 2, 3), dtype=np.uint8) for k in REQUIRED_KEYS if k != WALL}
    with pytest.raises(ValueError):
        to_image(board, state, table)
