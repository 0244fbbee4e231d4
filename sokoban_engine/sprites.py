from __future__ import annotations
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Mapping, Tuple

import numpy as np

from .elements import Element

SPRITE_SIZE = 16
SPRITE_CHANNELS = 3

AGENT = 1 << Element.AGENT
WALL = 1 << Element.WALL
BOX = 1 << Element.BOX
GOAL = 1 << Element.GOAL

# Every flag combination a valid state can put on one cell
REQUIRED_KEYS: Tuple[int, ...] = (
    0,
    AGENT,
    WALL,
    BOX,
    GOAL,
    AGENT | GOAL,
    BOX | GOAL,
)

COLORS = {
    "floor": np.array([243, 248, 238]),
    "wall": np.array([101, 80, 56]),
    "mortar": np.array([78, 61, 42]),
    "goal": np.array([220, 60, 60]),
    "box": np.array([196, 149, 72]),
    "box_edge": np.array([128, 90, 33]),
    "box_on_goal": np.array([92, 168, 84]),
    "agent": np.array([60, 110, 200]),
}

SpriteTable = Mapping[int, np.ndarray]


def fill_coords(img: np.ndarray, fn: Callable[[float, float], bool], color: np.ndarray) -> np.ndarray:
    """Fill pixels whose normalized center (x, y) in [0, 1] satisfies fn."""
    for y in range(img.shape[0]):
        for x in range(img.shape[1]):
            yf = (y + 0.5) / img.shape[0]
            xf = (x + 0.5) / img.shape[1]
            if fn(xf, yf):
                img[y, x] = color
    return img


def point_in_rect(xmin: float, xmax: float, ymin: float, ymax: float) -> Callable[[float, float], bool]:
    def fn(x, y):
        return xmin <= x <= xmax and ymin <= y <= ymax
    return fn


def point_in_circle(cx: float, cy: float, r: float) -> Callable[[float, float], bool]:
    def fn(x, y):
        return (x - cx) * (x - cx) + (y - cy) * (y - cy) <= r * r
    return fn


def point_in_ring(cx: float, cy: float, r_out: float, r_in: float) -> Callable[[float, float], bool]:
    outer = point_in_circle(cx, cy, r_out)
    inner = point_in_circle(cx, cy, r_in)

    def fn(x, y):
        return outer(x, y) and not inner(x, y)
    return fn


def _floor(size: int) -> np.ndarray:
    img = np.zeros((size, size, SPRITE_CHANNELS), dtype=np.uint8)
    img[:, :] = COLORS["floor"]
    return img


def _wall(size: int) -> np.ndarray:
    img = np.zeros((size, size, SPRITE_CHANNELS), dtype=np.uint8)
    img[:, :] = COLORS["wall"]
    # brick mortar lines
    fill_coords(img, point_in_rect(0, 1, 0.45, 0.55), COLORS["mortar"])
    fill_coords(img, point_in_rect(0.45, 0.55, 0, 0.45), COLORS["mortar"])
    return img


def _goal(img: np.ndarray) -> np.ndarray:
    return fill_coords(img, point_in_ring(0.5, 0.5, 0.38, 0.26), COLORS["goal"])


def _box(img: np.ndarray, on_goal: bool) -> np.ndarray:
    fill_coords(img, point_in_rect(0.1, 0.9, 0.1, 0.9), COLORS["box_edge"])
    fill_coords(img, point_in_rect(0.2, 0.8, 0.2, 0.8), COLORS["box_on_goal" if on_goal else "box"])
    return img


def _agent(img: np.ndarray) -> np.ndarray:
    fill_coords(img, point_in_circle(0.5, 0.3, 0.15), COLORS["agent"])
    fill_coords(img, point_in_rect(0.3, 0.7, 0.45, 0.9), COLORS["agent"])
    return img


@lru_cache(maxsize=8)
def default_sprites(size: int = SPRITE_SIZE) -> SpriteTable:
    """Read-only flag -> (size, size, 3) uint8 tile table covering REQUIRED_KEYS."""
    tiles = {
        0: _floor(size),
        WALL: _wall(size),
        GOAL: _goal(_floor(size)),
        BOX: _box(_floor(size), on_goal=False),
        BOX | GOAL: _box(_goal(_floor(size)), on_goal=True),
        AGENT: _agent(_floor(size)),
        AGENT | GOAL: _agent(_goal(_floor(size))),
    }
    for tile in tiles.values():
        tile.flags.writeable = False
    return MappingProxyType(tiles)


def validate_sprites(sprites: SpriteTable) -> Tuple[int, int, int]:
    """Checks the table is total over REQUIRED_KEYS with one HWC uint8 shape; returns it."""
    missing = [k for k in REQUIRED_KEYS if k not in sprites]
    if missing:
        raise ValueError(f"Sprite table misses flag combinations: {missing}")
    shapes = {tuple(np.shape(sprites[k])) for k in REQUIRED_KEYS}
    if len(shapes) != 1:
        raise ValueError(f"Sprites differ in shape: {sorted(shapes)}")
    shape = shapes.pop()
    if len(shape) != 3 or shape[2] != SPRITE_CHANNELS:
        raise ValueError(f"Sprites must be HxWx{SPRITE_CHANNELS}, got {shape}")
    return shape  # type: ignore[return-value]
