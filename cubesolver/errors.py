"""
Error taxonomy for the cube solver.

Everything the solver rejects derives from CubeError. Problems with the
supplied layout also derive from ValueError so callers that only care about
"bad input" can catch that.
"""

from typing import Optional, Sequence


class CubeError(Exception):
    """Base class for every error raised by the solver."""
    pass


class InvalidCubeError(CubeError, ValueError):
    """The supplied cube cannot be solved as given."""
    pass


class IncompleteScanError(InvalidCubeError):
    """Fewer than six faces were supplied."""

    def __init__(self, missing_faces: Sequence[str]):
        self.missing_faces = tuple(missing_faces)
        super().__init__(
            f"Expected 6 scanned faces, missing {len(self.missing_faces)}: "
            f"{', '.join(self.missing_faces)}"
        )


class MalformedLayoutError(InvalidCubeError):
    """The layout has the wrong shape or an unusable set of colours."""
    pass


class UnresolvedPieceError(InvalidCubeError):
    """A corner or edge shows a colour combination no real piece has."""

    def __init__(self, slot: str, facelets: Sequence[int], colors: Sequence[str]):
        self.slot = slot
        self.facelets = tuple(facelets)
        self.colors = tuple(colors)
        super().__init__(
            f"Stickers {list(self.facelets)} at {slot} show {list(self.colors)}, "
            f"which matches no piece"
        )


class DuplicateOrMissingPieceError(InvalidCubeError):
    """A piece (or colour) appears more or less often than once (nine times)."""

    def __init__(self, message: str, duplicates: Sequence[str] = (),
                 missing: Sequence[str] = (), color_counts: Optional[dict] = None):
        self.duplicates = tuple(duplicates)
        self.missing = tuple(missing)
        self.color_counts = dict(color_counts or {})
        super().__init__(message)


class TwistedCornerError(InvalidCubeError):
    """Corner orientations do not sum to a multiple of three."""
    pass


class FlippedEdgeError(InvalidCubeError):
    """Edge orientations do not sum to a multiple of two."""
    pass


class PermutationParityError(InvalidCubeError):
    """Corner and edge permutations have different parity."""
    pass


class NoSolutionFoundError(CubeError):
    """The search exhausted its depth cap. Indicates a defect for valid input."""

    def __init__(self, max_length: int):
        self.max_length = max_length
        super().__init__(f"No solution found within {max_length} moves")


class TableConsistencyError(CubeError):
    """A move or pruning table failed its construction check."""
    pass
