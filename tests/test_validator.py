import sys
import os

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cubesolver.cube_state import CubeState
from cubesolver.errors import (
    DuplicateOrMissingPieceError,
    FlippedEdgeError,
    InvalidCubeError,
    PermutationParityError,
    TwistedCornerError,
)
from cubesolver.facelets import scrambled_layout
from cubesolver.moves import apply_moves
from cubesolver.parser import parse_layout
from cubesolver.validator import count_swaps, is_valid, permutation_parity, validate

SCRAMBLE = "R U F' L2 D B"


def _stickers(moves=""):
    return list(scrambled_layout(moves).to_string())


def test_count_swaps():
    assert count_swaps([0, 1, 2, 3]) == 0
    assert count_swaps([1, 0, 2, 3]) == 1
    assert count_swaps([1, 2, 3, 0]) == 3
    assert permutation_parity([1, 2, 0]) == 0
    assert permutation_parity([3, 0, 1, 2]) == 1


def test_scrambled_states_are_valid():
    state = apply_moves(CubeState.solved_state(), SCRAMBLE)
    assert validate(state) is state
    assert is_valid(state)


def test_twisted_corner():
    stickers = _stickers(SCRAMBLE)
    a, b, c = 8, 9, 20  # URF corner
    stickers[a], stickers[b], stickers[c] = stickers[c], stickers[a], stickers[b]
    state = parse_layout(stickers)
    with pytest.raises(TwistedCornerError):
        validate(state)
    assert not is_valid(state)


def test_flipped_edge():
    stickers = _stickers(SCRAMBLE)
    stickers[5], stickers[10] = stickers[10], stickers[5]  # UR edge
    with pytest.raises(FlippedEdgeError):
        validate(parse_layout(stickers))


def test_swapped_edges_break_parity():
    stickers = _stickers(SCRAMBLE)
    # Exchange the UR and UF edges without turning either.
    stickers[5], stickers[7] = stickers[7], stickers[5]
    stickers[10], stickers[19] = stickers[19], stickers[10]
    with pytest.raises(PermutationParityError):
        validate(parse_layout(stickers))


def test_swapped_corners_break_parity():
    state = CubeState.solved_state()
    state.cp[0], state.cp[1] = state.cp[1], state.cp[0]
    with pytest.raises(PermutationParityError):
        validate(state)


def test_swapping_both_is_valid():
    state = CubeState.solved_state()
    state.cp[0], state.cp[1] = state.cp[1], state.cp[0]
    state.ep[0], state.ep[1] = state.ep[1], state.ep[0]
    assert is_valid(state)


def test_duplicate_corner():
    state = CubeState.solved_state()
    state.cp[1] = 0
    with pytest.raises(DuplicateOrMissingPieceError) as exc:
        validate(state)
    assert exc.value.duplicates == ("URF",)
    assert exc.value.missing == ("UFL",)


def test_duplicate_edge():
    state = CubeState.solved_state()
    state.ep[11] = 8
    with pytest.raises(DuplicateOrMissingPieceError) as exc:
        validate(state)
    assert exc.value.duplicates == ("FR",)
    assert exc.value.missing == ("BR",)


def test_bad_shape():
    state = CubeState.solved_state()
    state.co = [0] * 7
    with pytest.raises(InvalidCubeError):
        validate(state)
    state = CubeState.solved_state()
    state.eo[0] = 2
    with pytest.raises(InvalidCubeError):
        validate(state)


def test_all_errors_are_value_errors():
    for cls in (TwistedCornerError, FlippedEdgeError, PermutationParityError, DuplicateOrMissingPieceError):
        assert issubclass(cls, ValueError)
        assert issubclass(cls, InvalidCubeError)
