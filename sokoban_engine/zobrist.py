import random
from typing import Iterable, Sequence, Tuple

from .elements import Element, NUM_ELEMENTS


class Zobrist:
    """Zobrist hash basis for a Sokoban board.

    For a fixed board size, we generate one 64-bit key per (kind, cell) pair
    for kind in Agent, Wall, Box, Goal, Empty. Keys are drawn kind-major from
    random.Random(seed), so the same seed always rebuilds the same table.

    A state hash is the XOR of:
      - the agent key on the agent cell
      - the box key on every box cell
      - the terrain key on every wall and goal cell
    Empty floor contributes nothing.
    """
    __slots__ = ("size", "seed", "keys")

    def __init__(self, size: int, seed: int = 0) -> None:
        rng = random.Random(seed)
        self.size = size
        self.seed = seed
        self.keys: Tuple[int, ...] = tuple(
            rng.getrandbits(64) for _ in range(NUM_ELEMENTS * size)
        )

    def key(self, kind: Element, idx: int) -> int:
        return self.keys[int(kind) * self.size + idx]

    def static_hash(self, terrain: Sequence[int]) -> int:
        h = 0
        for idx, el in enumerate(terrain):
            if el == Element.WALL or el == Element.GOAL:
                h ^= self.key(Element(el), idx)
        return h

    def hash(self, terrain: Sequence[int], agent: int, boxes: Iterable[int]) -> int:
        """Full recomputation; the engine itself only updates incrementally."""
        h = self.static_hash(terrain)
        h ^= self.key(Element.AGENT, agent)
        for b in boxes:
            h ^= self.key(Element.BOX, b)
        return h
