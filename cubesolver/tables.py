"""
Move and pruning tables for the two-phase search.

Move tables map (coordinate, move) to the coordinate after the move. Pruning
tables hold, for a pair of coordinates, the exact number of moves needed to
bring both back to 0; they are filled by a breadth-first search from the
solved pair over the same moves the search uses, so they never overestimate.

Tables are built once per process on first use and are read-only numpy
arrays after that, so the search can index them a whole batch of nodes at a
time.
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from . import coordinates as coord
from .errors import TableConsistencyError
from .moves import MOVE_DATA, N_MOVE, PHASE2_MOVES

logger = logging.getLogger(__name__)

ALL_MOVES = tuple(range(N_MOVE))
UNREACHED = -1


@dataclass(frozen=True)
class SolverTables:
    """
    Flattened, read-only tables. Move tables are indexed [N_MOVE * coordinate + move];
    pruning tables are indexed [a * size_b + b].
    """
    twist_move: np.ndarray
    flip_move: np.ndarray
    slice_move: np.ndarray
    corner_perm_move: np.ndarray
    edge_perm_move: np.ndarray      # phase-2 moves only, -1 elsewhere
    slice_perm_move: np.ndarray     # phase-2 moves only, -1 elsewhere
    u_edges_move: np.ndarray
    d_edges_move: np.ndarray
    slice_sorted_move: np.ndarray
    edge_merge: np.ndarray          # [u_edges * 24 + d_edges % 24] -> edge_perm, -1 outside phase 2
    twist_slice_prune: np.ndarray
    flip_slice_prune: np.ndarray
    twist_flip_prune: np.ndarray
    corner_slice_prune: np.ndarray
    edge_slice_prune: np.ndarray


# --- move tables ---

def _move_arrays(moves):
    arrays = []
    for m in moves:
        data = MOVE_DATA[m]
        arrays.append((m,
                       np.array(data['cp_p']), np.array(data['co_i']),
                       np.array(data['ep_p']), np.array(data['eo_i'])))
    return arrays


def _check_bijective(name, table, moves):
    size = table.shape[0]
    expected = np.arange(size)
    for m in moves:
        if not np.array_equal(np.sort(table[:, m]), expected):
            raise TableConsistencyError(f"{name} move table: move {m} is not a bijection")


def build_move_table(name, size, step, moves=ALL_MOVES):
    """
    step(cp_p, co_i, ep_p, eo_i) returns the coordinates of every state 0..size-1
    after one move. Columns for moves outside `moves` stay -1.
    """
    table = np.full((size, N_MOVE), UNREACHED, dtype=np.int64)
    for m, cp_p, co_i, ep_p, eo_i in _move_arrays(moves):
        table[:, m] = step(cp_p, co_i, ep_p, eo_i)
    _check_bijective(name, table, moves)
    return table


def twist_move_table():
    co = coord.set_twist(np.arange(coord.N_TWIST))
    return build_move_table(
        "twist", coord.N_TWIST,
        lambda cp_p, co_i, ep_p, eo_i: coord.twist((co[:, cp_p] + co_i) % 3))


def flip_move_table():
    eo = coord.set_flip(np.arange(coord.N_FLIP))
    return build_move_table(
        "flip", coord.N_FLIP,
        lambda cp_p, co_i, ep_p, eo_i: coord.flip((eo[:, ep_p] + eo_i) % 2))


def slice_move_table():
    ep = coord.set_slice(np.arange(coord.N_SLICE))
    return build_move_table(
        "slice", coord.N_SLICE,
        lambda cp_p, co_i, ep_p, eo_i: coord.slice_(ep[:, ep_p]))


def corner_perm_move_table():
    cp = coord.set_corner_perm(np.arange(coord.N_CORNER_PERM))
    return build_move_table(
        "corner permutation", coord.N_CORNER_PERM,
        lambda cp_p, co_i, ep_p, eo_i: coord.corner_perm(cp[:, cp_p]))


def edge_perm_move_table():
    ep = coord.set_edge_perm(np.arange(coord.N_EDGE_PERM))
    return build_move_table(
        "edge permutation", coord.N_EDGE_PERM,
        lambda cp_p, co_i, ep_p, eo_i: coord.edge_perm(ep[:, ep_p]),
        moves=PHASE2_MOVES)


def slice_perm_move_table():
    ep = coord.set_slice_perm(np.arange(coord.N_SLICE_PERM))
    return build_move_table(
        "slice permutation", coord.N_SLICE_PERM,
        lambda cp_p, co_i, ep_p, eo_i: coord.slice_perm(ep[:, ep_p]),
        moves=PHASE2_MOVES)


def edge_group_move_table(name, first):
    ep = coord.set_edge_group(np.arange(coord.N_EDGE_GROUP), first)
    return build_move_table(
        name, coord.N_EDGE_GROUP,
        lambda cp_p, co_i, ep_p, eo_i: coord.edge_group(ep[:, ep_p], first))


def edge_merge_table():
    """
    Phase-2 edge permutation from the U and D edge groups. Inside phase 2 the
    U edges fix which of the eight layer slots hold D edges, so the order of
    the D edges is all that is needed from d_edges.
    """
    ep = coord.set_edge_perm(np.arange(coord.N_EDGE_PERM))
    index = (coord.edge_group(ep, coord.FIRST_U_EDGE) * coord.N_SLICE_PERM +
             coord.edge_group(ep, coord.FIRST_D_EDGE) % coord.N_SLICE_PERM)
    table = np.full(coord.N_EDGE_GROUP * coord.N_SLICE_PERM, UNREACHED, dtype=np.int64)
    table[index] = np.arange(coord.N_EDGE_PERM)
    if np.count_nonzero(table != UNREACHED) != coord.N_EDGE_PERM:
        raise TableConsistencyError("edge merge table: U and D edge groups do not fix the edge permutation")
    return table


# --- pruning tables ---

def build_prune_table(name, move_a, move_b, moves=ALL_MOVES):
    """
    Level-by-level BFS over the pair (a, b) starting from (0, 0). Every entry
    must be reached; the result is a read-only array of distances.
    """
    size_a, size_b = move_a.shape[0], move_b.shape[0]
    size = size_a * size_b
    depth_of = np.full(size, UNREACHED, dtype=np.int8)
    depth_of[0] = 0
    reached = 1
    depth = 0
    while reached < size:
        frontier = np.flatnonzero(depth_of == depth)
        if frontier.size == 0:
            break
        a, b = np.divmod(frontier, size_b)
        for m in moves:
            nxt = move_a[a, m] * size_b + move_b[b, m]
            nxt = nxt[depth_of[nxt] == UNREACHED]
            depth_of[nxt] = depth + 1
        depth += 1
        reached = int(np.count_nonzero(depth_of != UNREACHED))
        logger.debug("%s: depth %d, %d/%d entries", name, depth, reached, size)

    if reached < size:
        raise TableConsistencyError(
            f"{name} pruning table: {size - reached} of {size} entries unreachable")
    return _freeze(depth_of, np.uint8)


def _freeze(table, dtype=np.int32):
    table = np.ascontiguousarray(table.ravel(), dtype=dtype)
    table.setflags(write=False)
    return table


def build_tables() -> SolverTables:
    """Generates every table from scratch. Takes a few seconds."""
    started = time.perf_counter()
    logger.info("Generating move tables...")
    twist = twist_move_table()
    flip = flip_move_table()
    slice_ = slice_move_table()
    corner = corner_perm_move_table()
    edge = edge_perm_move_table()
    slice_perm = slice_perm_move_table()
    u_edges = edge_group_move_table("U edges", coord.FIRST_U_EDGE)
    d_edges = edge_group_move_table("D edges", coord.FIRST_D_EDGE)
    slice_sorted = edge_group_move_table("slice edges", coord.FIRST_SLICE_EDGE)

    logger.info("Generating pruning tables...")
    tables = SolverTables(
        twist_move=_freeze(twist),
        flip_move=_freeze(flip),
        slice_move=_freeze(slice_),
        corner_perm_move=_freeze(corner),
        edge_perm_move=_freeze(edge),
        slice_perm_move=_freeze(slice_perm),
        u_edges_move=_freeze(u_edges),
        d_edges_move=_freeze(d_edges),
        slice_sorted_move=_freeze(slice_sorted),
        edge_merge=_freeze(edge_merge_table()),
        twist_slice_prune=build_prune_table("twist x slice", twist, slice_),
        flip_slice_prune=build_prune_table("flip x slice", flip, slice_),
        twist_flip_prune=build_prune_table("twist x flip", twist, flip),
        corner_slice_prune=build_prune_table("corner x slice permutation", corner, slice_perm,
                                             moves=PHASE2_MOVES),
        edge_slice_prune=build_prune_table("edge x slice permutation", edge, slice_perm,
                                           moves=PHASE2_MOVES),
    )
    logger.info("All tables generated in %.2fs", time.perf_counter() - started)
    return tables


# --- process-wide cache ---

_tables: Optional[SolverTables] = None
_tables_lock = threading.Lock()


def get_tables() -> SolverTables:
    """Returns the shared tables, building them on the first call. Concurrent first callers build once."""
    global _tables
    tables = _tables
    if tables is None:
        with _tables_lock:
            if _tables is None:
                _tables = build_tables()
            tables = _tables
    return tables


def tables_ready() -> bool:
    return _tables is not None


def reset_tables():
    """Drops the cached tables; the next get_tables() rebuilds them."""
    global _tables
    with _tables_lock:
        _tables = None
