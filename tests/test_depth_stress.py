import sys
import os
import random
import time

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cubesolver.config import SolverConfig
from cubesolver.cube_state import CubeState
from cubesolver.facelets import FaceletLayout, scrambled_layout
from cubesolver.moves import MOVE_NAMES
from cubesolver.solver import CubeSolver
from independent_validator import verify_solution


@pytest.fixture(scope="module")
def default_solver(tables):
    solver = CubeSolver(tables=tables)
    assert solver.config == SolverConfig()
    return solver


def test_superflip_within_20_moves(default_solver):
    """Every edge flipped in place: 20 moves in the face-turn metric, phase 1 alone needs 13."""
    state = CubeState.solved_state()
    state.eo = [1] * 12
    layout = FaceletLayout.from_cube_state(state).to_string()

    start_time = time.time()
    solution = default_solver.solve(layout)
    duration = time.time() - start_time

    print(f"\nSuperflip solved in {len(solution)} moves, {duration:.2f}s: {' '.join(solution)}")
    assert len(solution) <= 20
    assert verify_solution(layout, solution)
    assert duration < 180.0, f"Superflip took {duration:.1f}s"


@pytest.mark.parametrize("seed", range(3))
def test_random_full_depth_cubes(default_solver, seed):
    rng = random.Random(5000 + seed)
    scramble = [rng.choice(MOVE_NAMES) for _ in range(60)]
    layout = scrambled_layout(scramble).to_string()

    start_time = time.time()
    solution = default_solver.solve(layout)
    duration = time.time() - start_time

    print(f"\nRandom cube {seed} solved in {len(solution)} moves, {duration:.2f}s")
    assert len(solution) <= 20
    assert verify_solution(layout, solution)
    assert duration < 60.0, f"Random cube {seed} took {duration:.1f}s"
