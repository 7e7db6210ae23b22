"""
The two searches of Kociemba's algorithm.

Phase 1 brings the cube into the subgroup <U, D, R2, F2, L2, B2> (all pieces
oriented, slice edges in the slice). Phase 2 solves the cube using only
moves of that subgroup. Both are iterative-deepening depth-first searches
that cut a branch as soon as a pruning table says the goal cannot be reached
in the moves left.

The searches walk the tree a batch of sibling subtrees at a time: every node
of a batch is expanded by all allowed moves with one round of numpy table
lookups, the survivors of the pruning test are split into batches again and
searched depth-first. Memory stays proportional to depth * BATCH_SIZE and
maneuvers come out in the same order a node-by-node search would find them.
"""

import logging
from typing import NamedTuple, Optional

import numpy as np

from .coordinates import N_FLIP, N_SLICE, N_SLICE_PERM
from .moves import N_MOVE, PHASE2_MOVES, PHASE2_MOVE_SET
from .tables import SolverTables

logger = logging.getLogger(__name__)

NO_FACE = -1
BATCH_SIZE = 1 << 14


def skip_move(face: int, last_face: int) -> bool:
    """
    True when turning `face` right after `last_face` is redundant:
    - the same face twice in a row collapses into one turn;
    - opposite faces commute, so only U before D, R before L, F before B is searched.
    Faces are numbered U, R, F, D, L, B, which makes opposites differ by 3.
    """
    return face == last_face or face == last_face - 3


# Row last_face + 1 marks the moves allowed after a turn of last_face; row 0 is the root.
_ALLOWED = np.array([[not skip_move(m // 3, last) for m in range(N_MOVE)]
                     for last in range(NO_FACE, 6)])
_PHASE2_MOVES = np.array(PHASE2_MOVES)
_ALLOWED_PHASE2 = _ALLOWED[:, _PHASE2_MOVES]
_LEAVES_SUBGROUP = np.array([m not in PHASE2_MOVE_SET for m in range(N_MOVE)])


class LeafBatch(NamedTuple):
    """
    Phase-1 maneuvers of one length, one per row of `maneuvers`, with the
    phase-2 coordinates each of them leads to (None when not tracked).
    """
    maneuvers: np.ndarray
    corner: Optional[np.ndarray]
    edge: Optional[np.ndarray]
    slice_perm: Optional[np.ndarray]


def phase1_bound(tables: SolverTables, twist: int, flip: int, slice_: int) -> int:
    return int(max(tables.twist_slice_prune[twist * N_SLICE + slice_],
                   tables.flip_slice_prune[flip * N_SLICE + slice_],
                   tables.twist_flip_prune[twist * N_FLIP + flip]))


def phase2_bound(tables: SolverTables, corner: int, edge: int, slice_perm: int) -> int:
    return int(max(tables.corner_slice_prune[corner * N_SLICE_PERM + slice_perm],
                   tables.edge_slice_prune[edge * N_SLICE_PERM + slice_perm]))


# --- phase 1 ---

def phase1_batches(tables: SolverTables, twist: int, flip: int, slice_: int, max_depth: int,
                   layers: Optional[tuple] = None):
    """
    Yields LeafBatch objects holding every phase-1 maneuver of up to max_depth
    moves, shortest first. Resuming the generator backtracks into the search.

    layers is (corner_perm, u_edges, d_edges, slice_sorted) of the start
    state; with it each batch also carries the phase-2 coordinates its
    maneuvers lead to.

    A maneuver ending in a phase-2 move is not yielded: the maneuver without
    that move reached the subgroup one move earlier.
    """
    move_tables = [tables.twist_move, tables.flip_move, tables.slice_move]
    start = [twist, flip, slice_]
    if layers is not None:
        move_tables += [tables.corner_perm_move, tables.u_edges_move,
                        tables.d_edges_move, tables.slice_sorted_move]
        start += list(layers)

    for depth in range(phase1_bound(tables, twist, flip, slice_), max_depth + 1):
        logger.debug("Phase 1: searching depth %d", depth)
        nodes = [np.array([value], dtype=np.int64) for value in start]
        pending, size = [], 0
        for leaves in _phase1_descend(tables, move_tables, nodes, np.array([NO_FACE]),
                                      np.empty((1, depth), dtype=np.int8), 0):
            pending.append(leaves)
            size += len(leaves[1])
            if size >= BATCH_SIZE:
                yield _leaf_batch(tables, pending, layers is not None)
                pending, size = [], 0
        if pending:
            yield _leaf_batch(tables, pending, layers is not None)


def _phase1_descend(tables, move_tables, nodes, last, path, level):
    togo = path.shape[1] - level
    if togo == 0:
        # Only goal states pass the bound check below with nothing left to spend.
        if level > 0:
            keep = _LEAVES_SUBGROUP[path[:, -1]]
            nodes, path = [values[keep] for values in nodes], path[keep]
        if len(path):
            yield nodes, path
        return

    twist_move, flip_move, slice_move = move_tables[:3]
    twist_slice, flip_slice, twist_flip = (
        tables.twist_slice_prune, tables.flip_slice_prune, tables.twist_flip_prune)
    step = BATCH_SIZE // N_MOVE
    for lo in range(0, len(last), step):
        parent, move = np.nonzero(_ALLOWED[last[lo:lo + step] + 1])
        parent += lo
        tw = twist_move[N_MOVE * nodes[0][parent] + move]
        sl = slice_move[N_MOVE * nodes[2][parent] + move]
        ok = twist_slice[tw * N_SLICE + sl] < togo
        parent, move, tw, sl = parent[ok], move[ok], tw[ok], sl[ok]
        fl = flip_move[N_MOVE * nodes[1][parent] + move]
        ok = (flip_slice[fl * N_SLICE + sl] < togo) & (twist_flip[tw * N_FLIP + fl] < togo)
        if not ok.any():
            continue
        parent, move = parent[ok], move[ok]
        children = [tw[ok], fl[ok], sl[ok]]
        children += [table[N_MOVE * values[parent] + move]
                     for table, values in zip(move_tables[3:], nodes[3:])]
        child_path = path[parent]
        child_path[:, level] = move
        yield from _phase1_descend(tables, move_tables, children, move // 3, child_path, level + 1)


def _leaf_batch(tables, pending, with_layers):
    maneuvers = np.concatenate([path for _, path in pending])
    if not with_layers:
        return LeafBatch(maneuvers, None, None, None)
    corner, u_edges, d_edges, slice_sorted = (
        np.concatenate([nodes[k] for nodes, _ in pending]) for k in range(3, 7))
    # Inside the subgroup the slice edges are home, so slice_sorted is the slice permutation.
    edge = tables.edge_merge[u_edges * N_SLICE_PERM + d_edges % N_SLICE_PERM]
    return LeafBatch(maneuvers, corner, edge, slice_sorted)


def phase1_solutions(tables: SolverTables, twist: int, flip: int, slice_: int, max_depth: int):
    """Phase-1 maneuvers (tuples of move indices) one at a time, shortest first."""
    for batch in phase1_batches(tables, twist, flip, slice_, max_depth):
        for maneuver in batch.maneuvers.tolist():
            yield tuple(maneuver)


# --- phase 2 ---

def phase2_solution(tables: SolverTables, corner: int, edge: int, slice_perm: int,
                    max_depth: int, last_face: int = NO_FACE):
    """
    Shortest phase-2 maneuver of at most max_depth moves that solves the cube,
    or None. last_face is the face of the move preceding phase 2.
    """
    corner_move, edge_move, slice_perm_move = (
        tables.corner_perm_move, tables.edge_perm_move, tables.slice_perm_move)
    corner_slice, edge_slice = tables.corner_slice_prune, tables.edge_slice_prune
    path = []

    def search(cp, ep, sp, togo, last):
        if togo == 0:
            return True
        for m in PHASE2_MOVES:
            face = m // 3
            if skip_move(face, last):
                continue
            cp1 = int(corner_move[N_MOVE * cp + m])
            ep1 = int(edge_move[N_MOVE * ep + m])
            sp1 = int(slice_perm_move[N_MOVE * sp + m])
            if (corner_slice[cp1 * N_SLICE_PERM + sp1] >= togo or
                    edge_slice[ep1 * N_SLICE_PERM + sp1] >= togo):
                continue
            path.append(m)
            if search(cp1, ep1, sp1, togo - 1, face):
                return True
            path.pop()
        return False

    for depth in range(phase2_bound(tables, corner, edge, slice_perm), max_depth + 1):
        if search(corner, edge, slice_perm, depth, last_face):
            return tuple(path)
    return None


def phase2_first_solvable(tables: SolverTables, corner, edge, slice_perm, max_depth: int) -> Optional[int]:
    """
    Position of the first phase-2 state in the given arrays that can be
    solved in at most max_depth moves, or None.

    States are searched together in slices of growing size, so an early
    solvable state is found without searching the whole batch. Within a
    slice, once one state is solved only states before it stay in the search.
    """
    corner, edge, slice_perm = (np.asarray(a, dtype=np.int64) for a in (corner, edge, slice_perm))
    lo, size = 0, 64
    while lo < corner.size:
        hi = lo + size
        first = _first_solvable(tables, corner[lo:hi], edge[lo:hi], slice_perm[lo:hi], max_depth)
        if first is not None:
            return lo + first
        lo, size = hi, min(size * 4, BATCH_SIZE)
    return None


def _first_solvable(tables, corner, edge, slice_perm, max_depth):
    bound = np.maximum(tables.corner_slice_prune[corner * N_SLICE_PERM + slice_perm],
                       tables.edge_slice_prune[edge * N_SLICE_PERM + slice_perm])
    first = corner.size
    for depth in range(int(bound.min()), max_depth + 1):
        todo = np.flatnonzero(bound[:first] <= depth)
        if todo.size == 0:
            continue
        first = _phase2_descend(tables, todo, corner[todo], edge[todo], slice_perm[todo],
                                np.full(todo.size, NO_FACE), depth, first)
    return None if first == corner.size else first


def _phase2_descend(tables, owner, cp, ep, sp, last, togo, first):
    """Returns `first` lowered to the smallest owner that reaches the solved cube."""
    solved = (cp == 0) & (ep == 0) & (sp == 0)
    if solved.any():
        first = min(first, int(owner[solved].min()))
    if togo == 0:
        return first

    corner_slice, edge_slice = tables.corner_slice_prune, tables.edge_slice_prune
    step = BATCH_SIZE // len(PHASE2_MOVES)
    for lo in range(0, len(owner), step):
        parent, k = np.nonzero(_ALLOWED_PHASE2[last[lo:lo + step] + 1])
        parent += lo
        alive = owner[parent] < first
        parent, k = parent[alive], k[alive]
        move = _PHASE2_MOVES[k]
        cp1 = tables.corner_perm_move[N_MOVE * cp[parent] + move]
        ep1 = tables.edge_perm_move[N_MOVE * ep[parent] + move]
        sp1 = tables.slice_perm_move[N_MOVE * sp[parent] + move]
        ok = ((corner_slice[cp1 * N_SLICE_PERM + sp1] < togo) &
              (edge_slice[ep1 * N_SLICE_PERM + sp1] < togo))
        if ok.any():
            first = _phase2_descend(tables, owner[parent[ok]], cp1[ok], ep1[ok], sp1[ok],
                                    move[ok] // 3, togo - 1, first)
    return first
