"""
Two-phase (Kociemba) solver for the 3x3x3 cube.

    from cubesolver import CubeSolver, scrambled_layout

    solver = CubeSolver()
    moves = solver.solve(scrambled_layout("R U F'"))   # tokens such as "F", "U'", "R2"
"""

from .config import SolverConfig
from .cube_state import CubeState
from .errors import (
    CubeError,
    DuplicateOrMissingPieceError,
    FlippedEdgeError,
    IncompleteScanError,
    InvalidCubeError,
    MalformedLayoutError,
    NoSolutionFoundError,
    PermutationParityError,
    TableConsistencyError,
    TwistedCornerError,
    UnresolvedPieceError,
)
from .facelets import FaceletLayout, scrambled_layout
from .parser import format_moves, parse_layout
from .solver import CubeSolver, solve
from .tables import get_tables, reset_tables
from .validator import is_valid, validate

__all__ = [
    "CubeError",
    "CubeSolver",
    "CubeState",
    "DuplicateOrMissingPieceError",
    "FaceletLayout",
    "FlippedEdgeError",
    "IncompleteScanError",
    "InvalidCubeError",
    "MalformedLayoutError",
    "NoSolutionFoundError",
    "PermutationParityError",
    "SolverConfig",
    "TableConsistencyError",
    "TwistedCornerError",
    "UnresolvedPieceError",
    "format_moves",
    "get_tables",
    "is_valid",
    "parse_layout",
    "reset_tables",
    "scrambled_layout",
    "solve",
    "validate",
]
