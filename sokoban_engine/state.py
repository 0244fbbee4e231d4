from dataclasses import dataclass, field
from typing import List, Set

__all__ = ["DynamicState"]


@dataclass(slots=True)
class DynamicState:
    """
    Mutable per-episode part of a Sokoban state.

    boxes: one cell per box; the position in the list is the box id.
    box_set: the same cells for O(1) membership; always equal to set(boxes).
    Hash and equality only look at box_set, never at the list order.
    """

    agent: int
    boxes: List[int]
    box_set: Set[int] = field(default_factory=set)
    hash: int = 0
    reward_signal: int = 0

    def __post_init__(self) -> None:
        if not self.box_set:
            self.box_set = set(self.boxes)

    def has_box(self, idx: int) -> bool:
        return idx in self.box_set

    def move_box(self, box_id: int, new_idx: int) -> int:
        """Moves box `box_id` to `new_idx`, keeps list and set in lockstep, returns the old cell."""
        old_idx = self.boxes[box_id]
        self.box_set.discard(old_idx)
        self.box_set.add(new_idx)
        self.boxes[box_id] = new_idx
        return old_idx

    def box_id_at(self, idx: int) -> int:
        return self.boxes.index(idx)

    def copy(self) -> "DynamicState":
        return DynamicState(
            agent=self.agent,
            boxes=list(self.boxes),
            box_set=set(self.box_set),
            hash=self.hash,
            reward_signal=self.reward_signal,
        )

    def same_placement(self, other: "DynamicState") -> bool:
        return self.agent == other.agent and self.box_set == other.box_set
