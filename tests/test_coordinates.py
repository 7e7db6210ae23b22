import sys
import os
import random

import numpy as np
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cubesolver import coordinates as coord
from cubesolver.cube_state import CubeState
from cubesolver.moves import PHASE2_MOVES, apply_move, apply_moves


def test_solved_coordinates_are_zero():
    state = CubeState.solved_state()
    assert coord.phase1_coords(state) == (0, 0, 0)
    assert coord.phase2_coords(state) == (0, 0, 0)


def test_scalar_results_are_ints():
    state = apply_moves(CubeState.solved_state(), "R U F")
    for value in coord.phase1_coords(state):
        assert type(value) is int


@pytest.mark.parametrize("encode, decode, size", [
    (coord.twist, coord.set_twist, coord.N_TWIST),
    (coord.flip, coord.set_flip, coord.N_FLIP),
    (coord.slice_, coord.set_slice, coord.N_SLICE),
    (coord.corner_perm, coord.set_corner_perm, coord.N_CORNER_PERM),
    (coord.edge_perm, coord.set_edge_perm, coord.N_EDGE_PERM),
    (coord.slice_perm, coord.set_slice_perm, coord.N_SLICE_PERM),
])
def test_decode_then_encode_covers_whole_range(encode, decode, size):
    values = np.arange(size)
    assert np.array_equal(encode(decode(values)), values)


def test_decoded_orientations_are_legal():
    co = coord.set_twist(np.arange(coord.N_TWIST))
    eo = coord.set_flip(np.arange(coord.N_FLIP))
    assert np.all(co.sum(axis=1) % 3 == 0)
    assert np.all(eo.sum(axis=1) % 2 == 0)


def test_decoded_slices_place_four_slice_edges():
    ep = coord.set_slice(np.arange(coord.N_SLICE))
    assert np.all((ep >= coord.FIRST_SLICE_EDGE).sum(axis=1) == 4)
    assert np.all(np.sort(ep, axis=1) == np.arange(12))
    assert np.array_equal(coord.set_slice(0), np.arange(12))


def test_slice_ignores_order_of_slice_edges():
    ep = list(range(12))
    ep[8], ep[11] = ep[11], ep[8]
    assert coord.slice_(ep) == 0
    assert coord.slice_perm(ep) != 0


def test_rank_permutation():
    assert coord.rank_permutation([0, 1, 2]) == 0
    assert coord.rank_permutation([2, 1, 0]) == 5
    assert coord.rank_permutation([1, 0, 2]) == 2
    assert coord.unrank_permutation(5, 3).tolist() == [2, 1, 0]


def test_batch_matches_scalar():
    rng = random.Random(1)
    states = []
    for _ in range(10):
        s = CubeState.solved_state()
        for _ in range(15):
            apply_move(s, rng.randrange(18))
        states.append(s)
    co = np.array([s.co for s in states])
    ep = np.array([s.ep for s in states])
    assert coord.twist(co).tolist() == [coord.twist(s.co) for s in states]
    assert coord.slice_(ep).tolist() == [coord.slice_(s.ep) for s in states]


def test_phase2_coords_inside_subgroup():
    rng = random.Random(9)
    state = CubeState.solved_state()
    for _ in range(30):
        apply_move(state, rng.choice(PHASE2_MOVES))
    corner, edge, slice_perm = coord.phase2_coords(state)
    assert 0 <= corner < coord.N_CORNER_PERM
    assert 0 <= edge < coord.N_EDGE_PERM
    assert 0 <= slice_perm < coord.N_SLICE_PERM


def test_phase2_coords_outside_subgroup():
    with pytest.raises(ValueError):
        coord.phase2_coords(apply_moves(CubeState.solved_state(), "F"))


@pytest.mark.parametrize("first", [coord.FIRST_U_EDGE, coord.FIRST_D_EDGE, coord.FIRST_SLICE_EDGE])
def test_edge_group_decode_then_encode(first):
    values = np.arange(coord.N_EDGE_GROUP)
    ep = coord.set_edge_group(values, first)
    assert np.all(np.sort(ep, axis=1) == np.arange(12))
    assert np.array_equal(coord.edge_group(ep, first), values)
    assert coord.edge_group(list(range(12)), first) == 0


def test_slice_group_splits_into_slice_and_order():
    rng = random.Random(5)
    state = CubeState.solved_state()
    for _ in range(40):
        apply_move(state, rng.randrange(18))
        assert (coord.edge_group(state.ep, coord.FIRST_SLICE_EDGE) ==
                coord.slice_(state.ep) * coord.N_SLICE_PERM +
                coord.rank_permutation([e for e in state.ep if e >= coord.FIRST_SLICE_EDGE]))


def test_layer_coords():
    assert coord.layer_coords(CubeState.solved_state()) == (0, 0, 0, 0)
    corner, u_edges, d_edges, slice_sorted = coord.layer_coords(apply_moves(CubeState.solved_state(), "U"))
    assert corner != 0 and u_edges != 0
    assert d_edges == 0 and slice_sorted == 0
    for value in coord.layer_coords(apply_moves(CubeState.solved_state(), "R F")):
        assert type(value) is int
