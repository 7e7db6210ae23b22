"""
Solver configuration.

Defaults follow the usual two-phase settings; every field can be overridden
from the environment through SolverConfig.from_env().
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SolverConfig:
    """
    Search limits and worker settings for CubeSolver.

    Phase 2 may use every move phase 1 left over (max_length minus the
    phase-1 length). max_phase2_length caps a single phase-2 attempt below
    that; a cap trades solutions that need a long phase 2 for speed, and a
    cap that is too small can make hard cubes fail with NoSolutionFoundError.
    """
    max_length: int = 20                      # Hard cap on the returned solution length
    max_phase2_length: Optional[int] = None   # None: whatever phase 1 left over
    max_workers: int = 1                      # Threads used by CubeSolver.submit()

    def __post_init__(self):
        if self.max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {self.max_length}")
        if self.max_phase2_length is not None and self.max_phase2_length < 0:
            raise ValueError(f"max_phase2_length must be >= 0, got {self.max_phase2_length}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    def phase2_budget(self, phase1_length: int) -> int:
        """Moves a phase-2 attempt may use after a phase-1 maneuver of the given length."""
        budget = self.max_length - phase1_length
        if self.max_phase2_length is not None:
            budget = min(budget, self.max_phase2_length)
        return budget

    @classmethod
    def from_env(cls) -> "SolverConfig":
        defaults = cls()
        return cls(
            max_length=_env_int("CUBESOLVER_MAX_LENGTH", defaults.max_length),
            max_phase2_length=_env_int("CUBESOLVER_MAX_PHASE2_LENGTH", defaults.max_phase2_length),
            max_workers=_env_int("CUBESOLVER_MAX_WORKERS", defaults.max_workers),
        )


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
