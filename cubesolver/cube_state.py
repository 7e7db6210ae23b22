CORNER_NAMES = ("URF", "UFL", "ULB", "UBR", "DFR", "DLF", "DBL", "DRB")
EDGE_NAMES = ("UR", "UF", "UL", "UB", "DR", "DF", "DL", "DB", "FR", "FL", "BL", "BR")

N_CORNERS = 8
N_EDGES = 12


class CubeState:
    """
    Represents the state of a Rubik's Cube at the cubie level.

    cp: Corner Permutation (8 elements, 0-7), cp[i] is the corner sitting in slot i
    co: Corner Orientation (8 elements, 0-2)
    ep: Edge Permutation (12 elements, 0-11), ep[i] is the edge sitting in slot i
    eo: Edge Orientation (12 elements, 0-1)

    Slot and piece order follow CORNER_NAMES and EDGE_NAMES.
    """
    def __init__(self, cp, co, ep, eo):
        self.cp = list(cp)
        self.co = list(co)
        self.ep = list(ep)
        self.eo = list(eo)

    @staticmethod
    def solved_state():
        """Returns a CubeState representing the solved cube."""
        return CubeState(
            cp=list(range(N_CORNERS)),
            co=[0] * N_CORNERS,
            ep=list(range(N_EDGES)),
            eo=[0] * N_EDGES
        )

    def is_solved(self) -> bool:
        """Returns True if the cube is in the solved state."""
        return (self.cp == list(range(N_CORNERS)) and
                self.co == [0] * N_CORNERS and
                self.ep == list(range(N_EDGES)) and
                self.eo == [0] * N_EDGES)

    def in_phase2_group(self) -> bool:
        """True when all pieces are oriented and the slice edges sit in the slice."""
        return (not any(self.co) and not any(self.eo) and
                all(e >= 8 for e in self.ep[8:]))

    def copy(self):
        """Returns a deep copy of the current cube state."""
        return CubeState(
            cp=list(self.cp),
            co=list(self.co),
            ep=list(self.ep),
            eo=list(self.eo)
        )

    def __eq__(self, other):
        if not isinstance(other, CubeState):
            return NotImplemented
        return (self.cp == other.cp and self.co == other.co and
                self.ep == other.ep and self.eo == other.eo)

    def __repr__(self):
        return f"CubeState(cp={self.cp}, co={self.co}, ep={self.ep}, eo={self.eo})"
