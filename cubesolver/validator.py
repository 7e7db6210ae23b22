"""
Reachability checks for a parsed cube.

A cubie state can be reached from the solved cube by face turns if and only
if every piece is present once, the corner twists add up to a multiple of 3,
the edge flips add up to a multiple of 2 and corners and edges have equal
permutation parity.
"""

from .cube_state import CubeState, CORNER_NAMES, EDGE_NAMES, N_CORNERS, N_EDGES
from .errors import (
    DuplicateOrMissingPieceError,
    FlippedEdgeError,
    InvalidCubeError,
    PermutationParityError,
    TwistedCornerError,
)


def count_swaps(perm) -> int:
    """Number of transpositions needed to sort `perm` (sum of cycle lengths - 1)."""
    visited = [False] * len(perm)
    swaps = 0
    for i in range(len(perm)):
        if not visited[i]:
            cycle_len = 0
            x = i
            while not visited[x]:
                visited[x] = True
                x = perm[x]
                cycle_len += 1
            if cycle_len > 1:
                swaps += (cycle_len - 1)
    return swaps


def permutation_parity(perm) -> int:
    return count_swaps(perm) % 2


def _check_shape(name, values, length, limit):
    if len(values) != length:
        raise InvalidCubeError(f"{name} must have {length} entries, got {len(values)}")
    for v in values:
        if not isinstance(v, int) or not 0 <= v < limit:
            raise InvalidCubeError(f"{name} entries must be integers in 0..{limit - 1}, got {v!r}")


def _check_pieces(kind, perm, names):
    counts = [0] * len(names)
    for piece in perm:
        counts[piece] += 1
    duplicates = [names[p] for p, n in enumerate(counts) if n > 1]
    missing = [names[p] for p, n in enumerate(counts) if n == 0]
    if duplicates or missing:
        raise DuplicateOrMissingPieceError(
            f"Each {kind} must appear exactly once: duplicated {duplicates}, missing {missing}",
            duplicates=duplicates,
            missing=missing,
        )


def validate(state: CubeState) -> CubeState:
    """Raises the matching InvalidCubeError subclass; returns the state when it is reachable."""
    _check_shape("Corner permutation", state.cp, N_CORNERS, N_CORNERS)
    _check_shape("Corner orientation", state.co, N_CORNERS, 3)
    _check_shape("Edge permutation", state.ep, N_EDGES, N_EDGES)
    _check_shape("Edge orientation", state.eo, N_EDGES, 2)

    _check_pieces("corner", state.cp, CORNER_NAMES)
    _check_pieces("edge", state.ep, EDGE_NAMES)

    if sum(state.co) % 3 != 0:
        raise TwistedCornerError(f"Invalid Corner Orientation Sum: {sum(state.co)} (must be div by 3)")
    if sum(state.eo) % 2 != 0:
        raise FlippedEdgeError(f"Invalid Edge Orientation Sum: {sum(state.eo)} (must be div by 2)")

    if permutation_parity(state.cp) != permutation_parity(state.ep):
        raise PermutationParityError(
            "Invalid Permutation Parity (Corner and Edge swap parity mismatch).")
    return state


def is_valid(state: CubeState) -> bool:
    try:
        validate(state)
    except InvalidCubeError:
        return False
    return True
