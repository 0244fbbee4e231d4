from __future__ import annotations
from typing import Any, Dict, List, Optional, Set, Tuple

import numpy as np

from . import goal_check
from .board import BoardModel
from .config import GameParameters
from .deadlocks import has_deadlock, legal_actions_no_deadlocks
from .elements import NUM_ACTIONS, Action
from .moves import apply_action, legal_actions
from .observation import get_observation, observation_shape
from .parser import parse_board_str, to_board_str
from .render import image_shape, render_ascii, to_image
from .serialize import deserialize, serialize
from .sprites import SpriteTable, default_sprites
from .state import DynamicState


class SokobanGameState:
    """A Sokoban episode: shared read-only board plus the mutable dynamic state.

    Copies (copy.copy / copy.deepcopy / clone) duplicate only the dynamic
    state and keep pointing at the same BoardModel, so speculative moves on
    a copy never leak into the original.
    """

    name = "sokoban"
    num_actions = NUM_ACTIONS

    def __init__(
        self,
        board_str: Optional[str] = None,
        params: Optional[GameParameters] = None,
        sprites: Optional[SpriteTable] = None,
    ) -> None:
        params = params or GameParameters()
        if board_str is not None:
            params = params.with_overrides(game_board_str=board_str)
        self.params = params
        self._sprites = sprites
        self.board: BoardModel
        self.state: DynamicState
        self.reset()

    # ---- lifecycle
    def reset(self) -> None:
        """Re-parses the board string; the hash basis is regenerated from rng_seed."""
        self.board, self.state = parse_board_str(self.params.game_board_str, self.params.rng_seed)

    def clone(self) -> "SokobanGameState":
        other = SokobanGameState.__new__(SokobanGameState)
        other.params = self.params
        other._sprites = self._sprites
        other.board = self.board
        other.state = self.state.copy()
        return other

    # ---- transitions
    def apply_action(self, action: int) -> None:
        if isinstance(action, bool) or not isinstance(action, (int, np.integer)) \
                or not 0 <= int(action) < NUM_ACTIONS:
            raise ValueError(f"Invalid action: {action!r}")
        apply_action(self.board, self.state, Action(int(action)))

    def legal_actions(self) -> List[Action]:
        return legal_actions(self.board, self.state)

    def legal_actions_no_deadlocks(self) -> List[Action]:
        return legal_actions_no_deadlocks(self.board, self.state)

    # ---- predicates
    def is_solution(self) -> bool:
        return goal_check.is_solution(self.board, self.state)

    is_terminal = is_solution

    def is_deadlocked(self) -> bool:
        return has_deadlock(self.board, self.state)

    # ---- signals
    def get_hash(self) -> int:
        return self.state.hash

    def get_reward_signal(self) -> int:
        return self.state.reward_signal

    # ---- observations
    def _compact(self, compact: Optional[bool]) -> bool:
        return self.params.compact_observation if compact is None else compact

    def observation_shape(self, compact: Optional[bool] = None) -> Tuple[int, int, int]:
        return observation_shape(self.board, self._compact(compact))

    def get_observation(self, compact: Optional[bool] = None) -> np.ndarray:
        return get_observation(self.board, self.state, self._compact(compact))

    @property
    def sprites(self) -> SpriteTable:
        return self._sprites if self._sprites is not None else default_sprites(self.params.sprite_size)

    def image_shape(self) -> Tuple[int, int, int]:
        return image_shape(self.board, self.sprites)

    def to_image(self) -> np.ndarray:
        return to_image(self.board, self.state, self.sprites)

    def to_graph(self):
        # torch / torch_geometric are only needed for graph export
        from .graphs import grid_to_graph
        return grid_to_graph(self.board, self.state)

    # ---- queries
    def get_agent_index(self) -> int:
        return self.state.agent

    def get_box_indices(self) -> List[int]:
        return list(self.state.boxes)

    def get_box_index(self, box_id: int) -> int:
        return goal_check.box_index(self.state, box_id)

    def get_unsolved_box_ids(self) -> Set[int]:
        return goal_check.unsolved_box_ids(self.board, self.state)

    def get_solved_box_ids(self) -> Set[int]:
        return goal_check.solved_box_ids(self.board, self.state)

    def get_all_box_ids(self) -> Set[int]:
        return goal_check.all_box_ids(self.state)

    def get_empty_goal_indices(self) -> Set[int]:
        return goal_check.empty_goal_indices(self.board, self.state)

    def get_solved_goal_indices(self) -> Set[int]:
        return goal_check.solved_goal_indices(self.board, self.state)

    def get_all_goal_indices(self) -> Set[int]:
        return goal_check.all_goal_indices(self.board)

    def to_board_str(self) -> str:
        return to_board_str(self.board, self.state)

    # ---- serialization
    def serialize(self) -> bytes:
        return serialize(self.board, self.state)

    @classmethod
    def deserialize(cls, data: bytes, params: Optional[GameParameters] = None) -> "SokobanGameState":
        """Restores a snapshot; reset() afterwards returns to the snapshot's placement
        unless `params` names another starting board."""
        board, state = deserialize(data)
        obj = cls.__new__(cls)
        if params is None:
            params = GameParameters(game_board_str=to_board_str(board, state), rng_seed=board.seed)
        obj.params = params
        obj._sprites = None
        obj.board = board
        obj.state = state
        return obj

    def __getstate__(self) -> Dict[str, Any]:
        return {"snapshot": self.serialize(), "params": self.params}

    def __setstate__(self, d: Dict[str, Any]) -> None:
        self.board, self.state = deserialize(d["snapshot"])
        self.params = d["params"]
        self._sprites = None

    # ---- python protocol
    def __copy__(self) -> "SokobanGameState":
        return self.clone()

    def __deepcopy__(self, memo: Dict[int, Any]) -> "SokobanGameState":
        return self.clone()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SokobanGameState):
            return NotImplemented
        return self.board.same_layout(other.board) and self.state.same_placement(other.state)

    def __ne__(self, other: object) -> bool:
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __hash__(self) -> int:
        return self.state.hash

    def __str__(self) -> str:
        return render_ascii(self.board, self.state)

    def __repr__(self) -> str:
        return (f"SokobanGameState(rows={self.board.rows}, cols={self.board.cols}, "
                f"agent={self.state.agent}, boxes={self.state.boxes}, hash={self.state.hash:#018x})")
