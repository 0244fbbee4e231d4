from sokoban_engine.elements import Action
from sokoban_engine.parser import parse_level_str
from sokoban_engine.moves import apply_action
from sokoban_engine.goal_check import is_solution
from sokoban_engine.deadlocks import (
    is_goal_unreachable_deadlock,
    is_corner_deadlock,
    is_diagonal_pair_deadlock,
    is_wall_pair_deadlock,
    has_deadlock,
    legal_actions_no_deadlocks,
)

# two boxes, solvable
LVL = """
######
#    #
# $$ #
#  @ #
#..  #
######
"""
SOLUTION = "RUULLDDRRULLULDD"
MOVES = {"U": Action.UP, "R": Action.RIGHT, "D": Action.DOWN, "L": Action.LEFT}


def test_no_false_positive_along_solution():
    board, state = parse_level_str(LVL)
    assert not has_deadlock(board, state)
    for ch in SOLUTION:
        apply_action(board, state, MOVES[ch])
        assert not has_deadlock(board, state), ch
    assert is_solution(board, state)


def test_corner_deadlock():
    lvl = """
#####
#$  #
# @.#
#####
"""
    board, state = parse_level_str(lvl)
    # box in the left upper corner (not goal) → deadlock
    assert is_corner_deadlock(board, state, state.boxes[0])
    assert has_deadlock(board, state)


def test_corner_on_goal_is_fine():
    lvl = """
#####
#*  #
# @ #
#####
"""
    board, state = parse_level_str(lvl)
    assert not is_corner_deadlock(board, state, state.boxes[0])
    assert not has_deadlock(board, state)


def test_goal_unreachable_deadlock():
    # box against the left wall can only slide up/down, never reach the goal column
    lvl = """
######
#    #
#$ @ #
#  . #
######
"""
    board, state = parse_level_str(lvl)
    assert not is_corner_deadlock(board, state, state.boxes[0])
    assert is_goal_unreachable_deadlock(board, state)
    assert has_deadlock(board, state)


def test_goal_reach_respects_pusher_cell():
    board, _ = parse_level_str(LVL)
    goal = board.rc_to_idx(4, 1)
    reach = board.goal_reach[goal]
    # (2,3) can be pushed left twice then down twice
    assert (reach >> board.rc_to_idx(2, 3)) & 1
    # (1,1): agent would have to stand inside the top wall to push it down
    assert not (reach >> board.rc_to_idx(1, 1)) & 1


def test_diagonal_pair_deadlock():
    lvl = """
#######
#@    #
# $#  #
# $$  #
#  ...#
#######
"""
    board, state = parse_level_str(lvl)
    a = board.rc_to_idx(2, 2)
    b = board.rc_to_idx(3, 3)
    assert is_diagonal_pair_deadlock(board, state, a)
    assert is_diagonal_pair_deadlock(board, state, b)
    for box in state.boxes:
        assert not is_corner_deadlock(board, state, box)
        assert not is_wall_pair_deadlock(board, state, box)
    assert has_deadlock(board, state)


def test_wall_pair_deadlock():
    lvl = """
######
# $$ #
#  @ #
# .. #
######
"""
    board, state = parse_level_str(lvl)
    for box in state.boxes:
        assert not is_corner_deadlock(board, state, box)
    assert is_wall_pair_deadlock(board, state, state.boxes[0])
    assert has_deadlock(board, state)


def test_wall_pair_on_goals_is_fine():
    lvl = """
######
# ** #
#  @ #
######
"""
    board, state = parse_level_str(lvl)
    assert not is_wall_pair_deadlock(board, state, state.boxes[0])
    assert not has_deadlock(board, state)


def test_legal_actions_no_deadlocks_filters_corner_push():
    lvl = """
######
##   #
# $@ #
#   .#
######
"""
    board, state = parse_level_str(lvl)
    before = (state.agent, list(state.boxes), state.hash)
    assert not has_deadlock(board, state)
    assert legal_actions_no_deadlocks(board, state) == [Action.UP, Action.RIGHT, Action.DOWN]
    assert (state.agent, list(state.boxes), state.hash) == before
