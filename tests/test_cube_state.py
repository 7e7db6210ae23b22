import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cubesolver.cube_state import CubeState, CORNER_NAMES, EDGE_NAMES
from cubesolver.moves import apply_moves


def test_solved_state_representation():
    state = CubeState.solved_state()
    assert state.cp == list(range(8))
    assert state.co == [0] * 8
    assert state.ep == list(range(12))
    assert state.eo == [0] * 12
    assert state.is_solved()
    assert state.in_phase2_group()


def test_piece_names():
    assert len(CORNER_NAMES) == 8 and len(set(CORNER_NAMES)) == 8
    assert len(EDGE_NAMES) == 12 and len(set(EDGE_NAMES)) == 12
    # Slice edges come last.
    assert EDGE_NAMES[8:] == ("FR", "FL", "BL", "BR")


def test_copy_is_independent():
    state = CubeState.solved_state()
    clone = state.copy()
    apply_moves(clone, "R")
    assert state.is_solved()
    assert not clone.is_solved()
    assert state != clone


def test_equality():
    a = apply_moves(CubeState.solved_state(), "F2 U")
    b = apply_moves(CubeState.solved_state(), "F2 U")
    assert a == b
    assert a != CubeState.solved_state()
    assert (a == "not a cube") is False


def test_phase2_group_membership():
    assert apply_moves(CubeState.solved_state(), "U R2 D' F2").in_phase2_group()
    assert not apply_moves(CubeState.solved_state(), "R").in_phase2_group()


def test_repr_mentions_fields():
    text = repr(CubeState.solved_state())
    assert text.startswith("CubeState(cp=")
