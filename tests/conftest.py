import sys
import os

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cubesolver.solver import CubeSolver
from cubesolver.tables import get_tables


@pytest.fixture(scope="session")
def tables():
    # Built once for the whole run; every solver shares them.
    return get_tables()


@pytest.fixture(scope="session")
def solver(tables):
    with CubeSolver(tables=tables) as s:
        yield s
