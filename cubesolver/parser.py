from collections import Counter

from .cube_state import CubeState
from .errors import DuplicateOrMissingPieceError, MalformedLayoutError
from .facelets import FaceletLayout
from .moves import FACES, move_name

# Input accepted by parse_layout:
#   - a FaceletLayout
#   - a 54-char string, one label per sticker, faces in U, R, F, D, L, B order
#   - a sequence of 54 labels
#   - a mapping of face name -> 3x3 grid (a scan result)
# Color labels are free-form; the six centers define what they mean.


def parse_layout(layout) -> CubeState:
    """Parses a scanned layout into a CubeState. Does not check reachability."""
    layout = FaceletLayout.coerce(layout)
    scheme = layout.color_scheme

    counts = Counter(layout.stickers)
    extra = sorted((str(label) for label in counts if label not in scheme))
    if extra:
        raise MalformedLayoutError(
            f"Found colors {extra} that do not match any center; expected exactly 6 colors")

    wrong = {label: counts[label] for label in scheme if counts[label] != 9}
    if wrong:
        details = ", ".join(f"{label!r} ({scheme[label]} face) appears {n} times"
                            for label, n in sorted(wrong.items(), key=lambda kv: FACES.index(scheme[kv[0]])))
        raise DuplicateOrMissingPieceError(
            f"Each color must appear exactly 9 times: {details}",
            duplicates=[label for label, n in wrong.items() if n > 9],
            missing=[label for label, n in wrong.items() if n < 9],
            color_counts=dict(counts),
        )

    return layout.to_cube_state()


def format_moves(move_list) -> list[str]:
    """Converts move indices to notation tokens ("R", "R2", "R'")."""
    return [move_name(m) for m in move_list]
