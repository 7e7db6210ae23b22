from .cube_state import CubeState

FACES = "URFDLB"
N_MOVE = 18

# Move index = 3 * face + turn, turn 0 = quarter clockwise, 1 = half, 2 = quarter counter-clockwise.
TURN_SUFFIXES = ("", "2", "'")

# Clockwise quarter turns in "replaced by" form: after the turn, slot i holds the piece
# that was in slot cp_p[i] (ep_p[i]) and that piece gains co_i[i] (eo_i[i]) orientation.
BASIC_MOVES = {
    'U': {
        'cp_p': [3, 0, 1, 2, 4, 5, 6, 7],
        'co_i': [0, 0, 0, 0, 0, 0, 0, 0],
        'ep_p': [3, 0, 1, 2, 4, 5, 6, 7, 8, 9, 10, 11],
        'eo_i': [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    },
    'R': {
        'cp_p': [4, 1, 2, 0, 7, 5, 6, 3],
        'co_i': [2, 0, 0, 1, 1, 0, 0, 2],
        'ep_p': [8, 1, 2, 3, 11, 5, 6, 7, 4, 9, 10, 0],
        'eo_i': [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    },
    'F': {
        'cp_p': [1, 5, 2, 3, 0, 4, 6, 7],
        'co_i': [1, 2, 0, 0, 2, 1, 0, 0],
        'ep_p': [0, 9, 2, 3, 4, 8, 6, 7, 1, 5, 10, 11],
        'eo_i': [0, 1, 0, 0, 0, 1, 0, 0, 1, 1, 0, 0]
    },
    'D': {
        'cp_p': [0, 1, 2, 3, 5, 6, 7, 4],
        'co_i': [0, 0, 0, 0, 0, 0, 0, 0],
        'ep_p': [0, 1, 2, 3, 5, 6, 7, 4, 8, 9, 10, 11],
        'eo_i': [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    },
    'L': {
        'cp_p': [0, 2, 6, 3, 4, 1, 5, 7],
        'co_i': [0, 1, 2, 0, 0, 2, 1, 0],
        'ep_p': [0, 1, 10, 3, 4, 5, 9, 7, 8, 2, 6, 11],
        'eo_i': [0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    },
    'B': {
        'cp_p': [0, 1, 3, 7, 4, 5, 2, 6],
        'co_i': [0, 0, 1, 2, 0, 0, 2, 1],
        'ep_p': [0, 1, 2, 11, 4, 5, 6, 10, 8, 9, 3, 7],
        'eo_i': [0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 1]
    }
}


def _compose(a, b):
    """The single move equivalent to turning a, then b."""
    return {
        'cp_p': [a['cp_p'][b['cp_p'][i]] for i in range(8)],
        'co_i': [(a['co_i'][b['cp_p'][i]] + b['co_i'][i]) % 3 for i in range(8)],
        'ep_p': [a['ep_p'][b['ep_p'][i]] for i in range(12)],
        'eo_i': [(a['eo_i'][b['ep_p'][i]] + b['eo_i'][i]) % 2 for i in range(12)],
    }


MOVE_NAMES = []
MOVE_DATA = []
for _face in FACES:
    _quarter = BASIC_MOVES[_face]
    _half = _compose(_quarter, _quarter)
    _three = _compose(_half, _quarter)
    for _suffix, _data in zip(TURN_SUFFIXES, (_quarter, _half, _three)):
        MOVE_NAMES.append(_face + _suffix)
        MOVE_DATA.append(_data)
MOVE_NAMES = tuple(MOVE_NAMES)
MOVE_DATA = tuple(MOVE_DATA)

MOVE_INDEX = {name: idx for idx, name in enumerate(MOVE_NAMES)}

# Moves that keep a cube inside <U, D, R2, F2, L2, B2>.
PHASE2_MOVES = tuple(MOVE_INDEX[name] for name in
                     ("U", "U2", "U'", "R2", "F2", "D", "D2", "D'", "L2", "B2"))
PHASE2_MOVE_SET = frozenset(PHASE2_MOVES)


def move_face(move: int) -> int:
    return move // 3


def inverse_move(move: int) -> int:
    """U <-> U', U2 stays U2."""
    return 3 * (move // 3) + 2 - move % 3


def move_name(move: int) -> str:
    return MOVE_NAMES[move]


def parse_move(token) -> int:
    """Accepts a move index or a token such as "R", "R2", "R'"."""
    if isinstance(token, int):
        if not 0 <= token < N_MOVE:
            raise ValueError(f"Move index out of range: {token}")
        return token
    try:
        return MOVE_INDEX[token.strip()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown move token: {token!r}") from None


def parse_moves(moves) -> list[int]:
    """Accepts a space separated string or an iterable of tokens / indices."""
    if isinstance(moves, str):
        moves = moves.split()
    return [parse_move(m) for m in moves]


def invert_moves(moves) -> list[int]:
    return [inverse_move(m) for m in reversed(parse_moves(moves))]


def apply_move(state: CubeState, move):
    """Applies a move (index or token) to the CubeState in-place."""
    m = MOVE_DATA[parse_move(move)]
    p_cp, i_co = m['cp_p'], m['co_i']
    p_ep, i_eo = m['ep_p'], m['eo_i']

    cp, co = state.cp, state.co
    ep, eo = state.ep, state.eo

    state.cp = [cp[p_cp[i]] for i in range(8)]
    state.co = [(co[p_cp[i]] + i_co[i]) % 3 for i in range(8)]
    state.ep = [ep[p_ep[i]] for i in range(12)]
    state.eo = [(eo[p_ep[i]] + i_eo[i]) % 2 for i in range(12)]


def apply_moves(state: CubeState, moves):
    for m in parse_moves(moves):
        apply_move(state, m)
    return state


def undo_move(state: CubeState, move):
    """Undoes a move by applying its inverse in-place."""
    apply_move(state, inverse_move(parse_move(move)))


def merge_moves(moves) -> tuple:
    """
    Collapses turns of the same face that meet, also across a turn of the
    opposite face (R L R2 -> R' L). Returns move indices.
    """
    out = []
    for m in parse_moves(moves):
        face, turns = m // 3, m % 3 + 1
        j = len(out) - 1
        if j >= 1 and out[j] // 3 == (face + 3) % 6 and out[j - 1] // 3 == face:
            j -= 1
        if j >= 0 and out[j] // 3 == face:
            total = (out[j] % 3 + 1 + turns) % 4
            if total == 0:
                del out[j]
            else:
                out[j] = 3 * face + total - 1
        else:
            out.append(m)
    return tuple(out)
