import asyncio
import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from . import ida_star
from .config import SolverConfig
from .coordinates import layer_coords, phase1_coords
from .cube_state import CubeState
from .errors import NoSolutionFoundError
from .moves import merge_moves
from .parser import format_moves, parse_layout
from .tables import SolverTables, get_tables
from .validator import validate

logger = logging.getLogger(__name__)


class CubeSolver:
    """
    Two-phase (Kociemba) solver for a scanned 3x3x3 cube.

    Solutions are short (at most config.max_length moves, usually fewer) but
    not guaranteed to be the shortest possible. Tables are shared by every
    solver in the process and built on the first solve.
    """
    def __init__(self, config: Optional[SolverConfig] = None, tables: Optional[SolverTables] = None):
        self.config = config or SolverConfig()
        self._tables = tables
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    @property
    def tables(self) -> SolverTables:
        return self._tables if self._tables is not None else get_tables()

    def warm_up(self) -> "CubeSolver":
        """Builds the tables now instead of on the first solve."""
        _ = self.tables
        return self

    def solve(self, layout) -> list[str]:
        """
        Accepts a FaceletLayout, a 54-char string, a sequence of 54 labels or a
        face -> grid mapping and returns the solution as move tokens.
        """
        state = parse_layout(layout)
        return self.solve_state(state)

    def solve_state(self, state: CubeState) -> list[str]:
        validate(state)
        if state.is_solved():
            return []

        started = time.perf_counter()
        maneuver = self._search(state)
        solution = format_moves(maneuver)
        logger.info("Solved in %d moves (%.3fs): %s",
                    len(solution), time.perf_counter() - started, " ".join(solution))
        return solution

    def _search(self, state: CubeState) -> tuple:
        """
        Tries phase 2 on the phase-1 maneuvers, shortest first, and returns the
        first two-phase solution found. Phase 2 gets the moves phase 1 left
        over (see SolverConfig.phase2_budget). Turns meeting at the joint are
        merged (R then R2 is R').
        """
        tables = self.tables
        max_length = self.config.max_length

        batches = ida_star.phase1_batches(tables, *phase1_coords(state), max_length,
                                          layers=layer_coords(state))
        for batch in batches:
            phase1_length = batch.maneuvers.shape[1]
            budget = self.config.phase2_budget(phase1_length)
            first = ida_star.phase2_first_solvable(
                tables, batch.corner, batch.edge, batch.slice_perm, budget)
            if first is None:
                continue

            phase1 = tuple(batch.maneuvers[first].tolist())
            # Phase 2 may open on the face phase 1 ended with; the joint is merged below.
            phase2 = ida_star.phase2_solution(
                tables, int(batch.corner[first]), int(batch.edge[first]),
                int(batch.slice_perm[first]), budget)
            logger.debug("Found %d + %d move solution", len(phase1), len(phase2))
            return merge_moves(phase1 + phase2)

        raise NoSolutionFoundError(max_length)

    # --- running off the caller's thread ---

    def submit(self, layout) -> Future:
        """Runs solve() on the solver's worker pool and returns the Future."""
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.config.max_workers, thread_name_prefix="cubesolver")
            executor = self._executor
        return executor.submit(self.solve, layout)

    async def solve_async(self, layout) -> list[str]:
        """Awaitable solve; the search runs in the solver's worker pool."""
        return await asyncio.wrap_future(self.submit(layout))

    def close(self):
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def solve(layout, config: Optional[SolverConfig] = None) -> list[str]:
    """Solves a layout with a throwaway CubeSolver (tables are still shared)."""
    return CubeSolver(config).solve(layout)
