"""
Facelet model: the 54 stickers of a scanned cube.

Faces are stored in the order U, R, F, D, L, B, each face row-major as seen
when looking straight at it (U with B on top, D with F on top, the four side
faces with U on top):

             U1 U2 U3
             U4 U5 U6
             U7 U8 U9
    L1 L2 L3 F1 F2 F3 R1 R2 R3 B1 B2 B3
    L4 L5 L6 F4 F5 F6 R4 R5 R6 B4 B5 B6
    L7 L8 L9 F7 F8 F9 R7 R8 R9 B7 B8 B9
             D1 D2 D3
             D4 D5 D6
             D7 D8 D9

Sticker labels are arbitrary; the centre sticker of each face decides which
logical face a label stands for.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

from .cube_state import CubeState, CORNER_NAMES, EDGE_NAMES
from .errors import IncompleteScanError, MalformedLayoutError, UnresolvedPieceError
from .moves import FACES, apply_moves

N_FACELETS = 54
CENTER_FACELETS = (4, 13, 22, 31, 40, 49)

# Facelets of each corner slot, U/D sticker first, then clockwise.
CORNER_FACELETS = (
    (8, 9, 20),    # URF (U9, R1, F3)
    (6, 18, 38),   # UFL (U7, F1, L3)
    (0, 36, 47),   # ULB (U1, L1, B3)
    (2, 45, 11),   # UBR (U3, B1, R3)
    (29, 26, 15),  # DFR (D3, F9, R7)
    (27, 44, 24),  # DLF (D1, L9, F7)
    (33, 53, 42),  # DBL (D7, B9, L7)
    (35, 17, 51),  # DRB (D9, R9, B7)
)

# Facelets of each edge slot, U/D (or F/B for slice edges) sticker first.
EDGE_FACELETS = (
    (5, 10),   # UR
    (7, 19),   # UF
    (3, 37),   # UL
    (1, 46),   # UB
    (32, 16),  # DR
    (28, 25),  # DF
    (30, 43),  # DL
    (34, 52),  # DB
    (23, 12),  # FR
    (21, 41),  # FL
    (50, 39),  # BL
    (48, 14),  # BR
)

# Faces shown by each piece in the solved cube, in the same sticker order.
CORNER_COLORS = tuple(tuple(name) for name in CORNER_NAMES)
EDGE_COLORS = tuple(tuple(name) for name in EDGE_NAMES)


@dataclass(frozen=True)
class FaceletLayout:
    """Immutable 54-sticker layout."""
    stickers: tuple

    @classmethod
    def from_sequence(cls, labels) -> "FaceletLayout":
        labels = tuple(labels)
        if len(labels) < N_FACELETS and len(labels) % 9 == 0:
            raise IncompleteScanError(FACES[len(labels) // 9:])
        if len(labels) != N_FACELETS:
            raise MalformedLayoutError(
                f"Layout must have exactly {N_FACELETS} stickers, got {len(labels)}")
        return cls(labels)

    @classmethod
    def from_string(cls, s: str) -> "FaceletLayout":
        """One character per sticker; whitespace is ignored."""
        return cls.from_sequence("".join(s.split()))

    @classmethod
    def from_faces(cls, faces: Mapping) -> "FaceletLayout":
        """
        Builds a layout from a scan result keyed by face name ('U', 'R', ...).
        Each face is a 3x3 grid (list of rows) or a flat sequence of 9 labels.
        """
        missing = [name for name in FACES if faces.get(name) is None]
        if missing:
            raise IncompleteScanError(missing)
        unknown = sorted(set(faces) - set(FACES))
        if unknown:
            raise MalformedLayoutError(f"Unknown face names: {unknown}")

        labels = []
        for name in FACES:
            grid = faces[name]
            if isinstance(grid, str):
                stickers = list("".join(grid.split()))
            elif not isinstance(grid, Sequence):
                raise MalformedLayoutError(f"Face {name} must be a grid or a sequence of labels, got {grid!r}")
            elif len(grid) == 3 and all(isinstance(row, Sequence) and len(row) == 3 for row in grid):
                stickers = [label for row in grid for label in row]
            else:
                stickers = list(grid)
            if len(stickers) != 9:
                raise MalformedLayoutError(f"Face {name} must have 9 stickers, got {len(stickers)}")
            labels.extend(stickers)
        return cls(tuple(labels))

    @classmethod
    def coerce(cls, layout) -> "FaceletLayout":
        if isinstance(layout, FaceletLayout):
            return layout
        if isinstance(layout, str):
            return cls.from_string(layout)
        if isinstance(layout, Mapping):
            return cls.from_faces(layout)
        return cls.from_sequence(layout)

    @classmethod
    def from_cube_state(cls, state: CubeState, colors: Optional[Mapping] = None) -> "FaceletLayout":
        """Renders a cubie state; colors maps face letters to labels (default: the letters)."""
        colors = colors or {face: face for face in FACES}
        labels = [None] * N_FACELETS
        for face_idx, idx in enumerate(CENTER_FACELETS):
            labels[idx] = colors[FACES[face_idx]]
        for slot in range(8):
            piece, ori = state.cp[slot], state.co[slot]
            for n in range(3):
                labels[CORNER_FACELETS[slot][(n + ori) % 3]] = colors[CORNER_COLORS[piece][n]]
        for slot in range(12):
            piece, ori = state.ep[slot], state.eo[slot]
            for n in range(2):
                labels[EDGE_FACELETS[slot][(n + ori) % 2]] = colors[EDGE_COLORS[piece][n]]
        return cls(tuple(labels))

    @classmethod
    def solved(cls, colors: Optional[Mapping] = None) -> "FaceletLayout":
        return cls.from_cube_state(CubeState.solved_state(), colors)

    @property
    def centers(self) -> tuple:
        return tuple(self.stickers[idx] for idx in CENTER_FACELETS)

    @property
    def color_scheme(self) -> dict:
        """Maps each centre label to the face letter it stands for."""
        centers = self.centers
        if len(set(centers)) != 6:
            raise MalformedLayoutError(f"Center facelets must be six distinct colors, got {list(centers)}")
        return {label: face for face, label in zip(FACES, centers)}

    def face(self, name: str) -> tuple:
        start = 9 * FACES.index(name)
        return self.stickers[start:start + 9]

    def to_face_string(self) -> str:
        """The layout rewritten with face letters, e.g. 'UUUUUUUUURRR...'."""
        scheme = self.color_scheme
        faces = []
        for idx, label in enumerate(self.stickers):
            if label not in scheme:
                raise MalformedLayoutError(
                    f"Sticker {idx} ({FACES[idx // 9]}{idx % 9 + 1}) has color {label!r}, "
                    f"which is not the color of any center")
            faces.append(scheme[label])
        return "".join(faces)

    def to_cube_state(self) -> CubeState:
        """
        Identifies every corner and edge by matching its sticker faces against the
        canonical pieces, in every rotation. Raises UnresolvedPieceError for a
        combination no piece has, e.g. two stickers of one colour on a corner.
        """
        f = self.to_face_string()

        cp, co = [0] * 8, [0] * 8
        for slot, facelets in enumerate(CORNER_FACELETS):
            seen = tuple(f[idx] for idx in facelets)
            match = _match_piece(seen, CORNER_COLORS)
            if match is None:
                raise UnresolvedPieceError(CORNER_NAMES[slot], facelets,
                                           [self.stickers[idx] for idx in facelets])
            cp[slot], co[slot] = match

        ep, eo = [0] * 12, [0] * 12
        for slot, facelets in enumerate(EDGE_FACELETS):
            seen = tuple(f[idx] for idx in facelets)
            match = _match_piece(seen, EDGE_COLORS)
            if match is None:
                raise UnresolvedPieceError(EDGE_NAMES[slot], facelets,
                                           [self.stickers[idx] for idx in facelets])
            ep[slot], eo[slot] = match

        return CubeState(cp, co, ep, eo)

    def to_string(self) -> str:
        if all(isinstance(label, str) and len(label) == 1 for label in self.stickers):
            return "".join(self.stickers)
        return " ".join(str(label) for label in self.stickers)

    def __str__(self):
        return self.to_string()


def _match_piece(seen, canonical):
    """Returns (piece, orientation) where rotating `seen` by orientation gives the piece."""
    n = len(seen)
    for ori in range(n):
        rotated = tuple(seen[(ori + k) % n] for k in range(n))
        for piece, colors in enumerate(canonical):
            if rotated == colors:
                return piece, ori
    return None


def scrambled_layout(moves, colors: Optional[Mapping] = None) -> FaceletLayout:
    """The layout reached by applying `moves` to the solved cube."""
    state = apply_moves(CubeState.solved_state(), moves)
    return FaceletLayout.from_cube_state(state, colors)
