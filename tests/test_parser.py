import sys
import os

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cubesolver.cube_state import CubeState
from cubesolver.errors import DuplicateOrMissingPieceError, IncompleteScanError, MalformedLayoutError
from cubesolver.facelets import FaceletLayout, scrambled_layout
from cubesolver.moves import FACES, apply_moves, parse_moves
from cubesolver.parser import format_moves, parse_layout
from independent_validator import SOLVED


def test_parse_solved():
    assert parse_layout(SOLVED).is_solved()


def test_parse_accepts_every_input_form():
    expected = apply_moves(CubeState.solved_state(), "L F2 U'")
    layout = scrambled_layout("L F2 U'")
    text = layout.to_string()
    faces = {face: text[9 * i:9 * i + 9] for i, face in enumerate(FACES)}
    assert parse_layout(layout) == expected
    assert parse_layout(text) == expected
    assert parse_layout(list(text)) == expected
    assert parse_layout(faces) == expected


def test_color_appears_wrong_number_of_times():
    stickers = list(SOLVED)
    stickers[0] = 'R'
    with pytest.raises(DuplicateOrMissingPieceError) as exc:
        parse_layout(stickers)
    assert exc.value.duplicates == ('R',)
    assert exc.value.missing == ('U',)
    assert exc.value.color_counts['R'] == 10
    assert exc.value.color_counts['U'] == 8
    assert "'U' (U face) appears 8 times" in str(exc.value)


def test_seventh_color():
    stickers = list(SOLVED)
    stickers[0] = 'X'
    with pytest.raises(MalformedLayoutError):
        parse_layout(stickers)


def test_incomplete_scan():
    with pytest.raises(IncompleteScanError):
        parse_layout({'U': SOLVED[:9], 'R': SOLVED[9:18]})


def test_format_moves():
    assert format_moves(parse_moves("R U2 F'")) == ["R", "U2", "F'"]
    assert format_moves([]) == []


def test_layout_object_passes_through():
    layout = FaceletLayout.solved()
    assert FaceletLayout.coerce(layout) is layout
