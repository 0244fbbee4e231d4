import random

from sokoban_engine.elements import Action, RewardCode
from sokoban_engine.goal_check import is_solution
from sokoban_engine.moves import apply_action, is_pushable, is_traversible, legal_actions
from sokoban_engine.parser import parse_board_str, parse_level_str

BOARD = "2|3|1|1|1|0|2|3"

LVL = """
######
#    #
# $$ #
#  @ #
#..  #
######
"""


def _snapshot(state):
    return (state.agent, list(state.boxes), set(state.box_set), state.hash)


def test_push_onto_goal_solves():
    board, state = parse_board_str(BOARD)
    assert not is_solution(board, state)
    assert state.reward_signal == 0
    apply_action(board, state, Action.RIGHT)
    assert is_solution(board, state)
    assert state.reward_signal != 0
    assert state.agent == 4
    assert state.boxes == [5]


def test_out_of_bounds_and_wall_are_noops():
    board, state = parse_board_str(BOARD)
    before = _snapshot(state)
    for a in (Action.LEFT, Action.DOWN, Action.UP):
        apply_action(board, state, a)
        assert _snapshot(state) == before
        assert state.reward_signal == 0


def test_blocked_box_is_noop():
    # agent, box, box, goal, goal
    board, state = parse_board_str("1|5|0|2|2|3|3")
    before = _snapshot(state)
    assert not is_traversible(board, state, state.agent, Action.RIGHT)
    assert not is_pushable(board, state, state.agent, Action.RIGHT)
    apply_action(board, state, Action.RIGHT)
    assert _snapshot(state) == before


def test_push_into_wall_is_noop():
    board, state = parse_board_str("1|4|0|2|3|1")
    apply_action(board, state, Action.RIGHT)
    before = _snapshot(state)
    apply_action(board, state, Action.RIGHT)
    assert _snapshot(state) == before


def test_vertical_push_solves():
    board, state = parse_board_str("3|1|0|2|3")
    apply_action(board, state, Action.DOWN)
    assert is_solution(board, state)


def test_push_moves_exactly_one_box():
    board, state = parse_level_str(LVL)
    # walk to (1,2), above the left box
    for a in (Action.RIGHT, Action.UP, Action.UP, Action.LEFT, Action.LEFT):
        apply_action(board, state, a)
    boxes_before = list(state.boxes)
    pushed = state.boxes.index(board.rc_to_idx(2, 2))
    apply_action(board, state, Action.DOWN)
    for i, (old, new) in enumerate(zip(boxes_before, state.boxes)):
        if i == pushed:
            assert new == old + board.cols
        else:
            assert new == old
    assert state.agent == boxes_before[pushed]
    assert state.box_set == set(state.boxes)


def test_reward_signal_codes():
    board, state = parse_board_str("1|5|0|2|4|3|4")
    apply_action(board, state, Action.RIGHT)  # box onto plain floor
    assert state.reward_signal == 0
    apply_action(board, state, Action.RIGHT)  # box onto the goal, solved
    assert state.reward_signal == RewardCode.BOX_IN_GOAL | RewardCode.ALL_BOXES_IN_GOAL
    apply_action(board, state, Action.LEFT)
    assert state.reward_signal == 0


def test_partial_reward_without_solution():
    board, state = parse_level_str(LVL)
    for a in (Action.RIGHT, Action.UP, Action.UP, Action.LEFT, Action.LEFT, Action.DOWN, Action.DOWN):
        apply_action(board, state, a)
    assert state.reward_signal == RewardCode.BOX_IN_GOAL
    assert not is_solution(board, state)


def test_hash_matches_full_recompute_on_random_walk():
    board, state = parse_level_str(LVL)
    rng = random.Random(7)
    for _ in range(300):
        apply_action(board, state, Action(rng.randrange(4)))
        assert state.hash == board.zobrist.hash(board.terrain, state.agent, state.boxes)
        assert state.box_set == set(state.boxes)
        assert len(state.box_set) == len(state.boxes)


def test_legal_actions_are_all_directions():
    board, state = parse_board_str(BOARD)
    assert legal_actions(board, state) == [Action.UP, Action.RIGHT, Action.DOWN, Action.LEFT]
