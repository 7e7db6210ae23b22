"""
Coordinates: compact integers that index the search tables.

Every function takes either one state (a 1-D sequence) or a stack of states
(a 2-D array, one state per row) and returns an int or an array of ints
respectively, so the table builder can encode whole coordinate spaces at
once. All coordinates are 0 for the solved cube.

    twist        corner orientations, base 3          0..2186
    flip         edge orientations, base 2            0..2047
    slice        slots of the FR/FL/BL/BR edges       0..494
    corner_perm  corner permutation                   0..40319
    edge_perm    U/D-layer edge permutation (phase 2) 0..40319
    slice_perm   slice edge permutation (phase 2)     0..23
    edge_group   slots and order of four edges         0..11879
                 (u_edges, d_edges, slice_sorted)
"""

import math

import numpy as np

from .cube_state import CubeState

N_TWIST = 2187
N_FLIP = 2048
N_SLICE = 495
N_CORNER_PERM = 40320
N_EDGE_PERM = 40320
N_SLICE_PERM = 24
N_EDGE_GROUP = N_SLICE * N_SLICE_PERM

FIRST_SLICE_EDGE = 8  # FR; FL, BL, BR follow
FIRST_U_EDGE = 0
FIRST_D_EDGE = 4

FACT = [math.factorial(n) for n in range(13)]
BINOM = np.array([[math.comb(n, k) for k in range(13)] for n in range(13)], dtype=np.int64)

_POW3 = 3 ** np.arange(6, -1, -1, dtype=np.int64)
_POW2 = 2 ** np.arange(10, -1, -1, dtype=np.int64)


def _result(value):
    value = np.asarray(value)
    return int(value) if value.ndim == 0 else value


# --- orientations (mixed radix) ---

def twist(co):
    co = np.asarray(co, dtype=np.int64)
    return _result((co[..., :7] * _POW3).sum(axis=-1))


def set_twist(idx):
    idx = np.asarray(idx, dtype=np.int64)
    digits = (idx[..., None] // _POW3) % 3
    last = (-digits.sum(axis=-1)) % 3
    return np.concatenate([digits, last[..., None]], axis=-1)


def flip(eo):
    eo = np.asarray(eo, dtype=np.int64)
    return _result((eo[..., :11] * _POW2).sum(axis=-1))


def set_flip(idx):
    idx = np.asarray(idx, dtype=np.int64)
    digits = (idx[..., None] // _POW2) % 2
    last = digits.sum(axis=-1) % 2
    return np.concatenate([digits, last[..., None]], axis=-1)


# --- slice edge positions (binomial number system) ---

def slice_(ep):
    ep = np.asarray(ep, dtype=np.int64)
    occupied = ep >= FIRST_SLICE_EDGE
    idx = np.zeros(ep.shape[:-1], dtype=np.int64)
    seen = np.zeros(ep.shape[:-1], dtype=np.int64)
    for j in range(11, -1, -1):
        hit = occupied[..., j]
        idx = idx + np.where(hit, BINOM[11 - j, np.minimum(seen + 1, 12)], 0)
        seen = seen + hit
    return _result(idx)


def set_slice(idx):
    """Edge arrays with FR, FL, BL, BR (in that order) in the encoded slots, other edges in order."""
    rest = np.array(idx, dtype=np.int64)
    ep = np.empty(rest.shape + (12,), dtype=np.int64)
    left = np.full(rest.shape, 4, dtype=np.int64)
    other = np.zeros(rest.shape, dtype=np.int64)
    for j in range(12):
        c = BINOM[11 - j, left]
        take = (left > 0) & (rest >= c)
        ep[..., j] = np.where(take, FIRST_SLICE_EDGE + 4 - left, other)
        rest = np.where(take, rest - c, rest)
        other = np.where(take, other, other + 1)
        left = np.where(take, left - 1, left)
    return ep


# --- permutations (factorial number system, lexicographic rank) ---

def rank_permutation(perm):
    """Lexicographic rank of a permutation of any distinct, comparable values."""
    perm = np.asarray(perm, dtype=np.int64)
    n = perm.shape[-1]
    idx = np.zeros(perm.shape[:-1], dtype=np.int64)
    for i in range(n - 1):
        smaller = (perm[..., i + 1:] < perm[..., i:i + 1]).sum(axis=-1)
        idx = idx + smaller * FACT[n - 1 - i]
    return _result(idx)


def unrank_permutation(idx, n):
    """Inverse of rank_permutation for permutations of range(n)."""
    idx = np.asarray(idx, dtype=np.int64)
    shape = idx.shape
    available = np.broadcast_to(np.arange(n, dtype=np.int64), shape + (n,)).copy()
    perm = np.empty(shape + (n,), dtype=np.int64)
    for i in range(n):
        remaining = n - i
        digit = (idx // FACT[n - 1 - i]) % remaining
        perm[..., i] = np.take_along_axis(available, digit[..., None], axis=-1)[..., 0]
        keep = np.arange(remaining) != digit[..., None]
        available = available[keep].reshape(shape + (remaining - 1,))
    return perm


def corner_perm(cp):
    return rank_permutation(cp)


def set_corner_perm(idx):
    return unrank_permutation(idx, 8)


def edge_perm(ep):
    """Only meaningful while the U/D-layer edges stay in the U and D layers."""
    return rank_permutation(np.asarray(ep)[..., :8])


def set_edge_perm(idx):
    perm = unrank_permutation(idx, 8)
    slice_edges = np.broadcast_to(np.arange(8, 12, dtype=np.int64), perm.shape[:-1] + (4,))
    return np.concatenate([perm, slice_edges], axis=-1)


def slice_perm(ep):
    """Only meaningful while the slice edges stay in the slice."""
    return rank_permutation(np.asarray(ep)[..., 8:])


def set_slice_perm(idx):
    perm = unrank_permutation(idx, 4) + FIRST_SLICE_EDGE
    layer_edges = np.broadcast_to(np.arange(8, dtype=np.int64), perm.shape[:-1] + (8,))
    return np.concatenate([layer_edges, perm], axis=-1)


# --- four-edge groups, valid anywhere on the cube ---
#
# The group first..first+3 is encoded like the slice: slots are rotated so the
# group's home slots come last, then the slice coordinate of those slots is
# combined with the order the four edges appear in. For the slice edges this
# is slice * 24 + slice_perm.

def _group_slots(first):
    return (np.arange(12) + first + 4) % 12


def edge_group(ep, first):
    ep = np.asarray(ep, dtype=np.int64)
    rotated = (ep[..., _group_slots(first)] - first + FIRST_SLICE_EDGE) % 12
    members = rotated[rotated >= FIRST_SLICE_EDGE].reshape(rotated.shape[:-1] + (4,))
    return _result(np.asarray(slice_(rotated)) * N_SLICE_PERM + rank_permutation(members))


def set_edge_group(idx, first):
    """Edge arrays with the group placed as encoded; the other edges fill the free slots."""
    idx = np.asarray(idx, dtype=np.int64)
    rotated = set_slice(idx // N_SLICE_PERM)
    order = unrank_permutation(idx % N_SLICE_PERM, 4) + FIRST_SLICE_EDGE
    rotated[rotated >= FIRST_SLICE_EDGE] = order.reshape(-1)
    ep = np.empty_like(rotated)
    ep[..., _group_slots(first)] = (rotated + first - FIRST_SLICE_EDGE) % 12
    return ep


# --- per-solve helpers ---

def phase1_coords(state: CubeState) -> tuple:
    """(twist, flip, slice) of a cubie state."""
    return twist(state.co), flip(state.eo), slice_(state.ep)


def phase2_coords(state: CubeState) -> tuple:
    """(corner_perm, edge_perm, slice_perm) of a cubie state inside the phase-2 subgroup."""
    if not state.in_phase2_group():
        raise ValueError("Phase-2 coordinates need an oriented cube with the slice edges in the slice")
    return corner_perm(state.cp), edge_perm(state.ep), slice_perm(state.ep)


def layer_coords(state: CubeState) -> tuple:
    """
    (corner_perm, u_edges, d_edges, slice_sorted) of any cubie state. Phase 1
    carries these along so the phase-2 coordinates of every phase-1 maneuver
    are known without replaying it.
    """
    return (corner_perm(state.cp), edge_group(state.ep, FIRST_U_EDGE),
            edge_group(state.ep, FIRST_D_EDGE), edge_group(state.ep, FIRST_SLICE_EDGE))
