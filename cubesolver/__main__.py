"""
Command line entry point.

    python -m cubesolver UUUUUUUUURRRRRRRRRFFFFFFFFFDDDDDDDDDLLLLLLLLLBBBBBBBBB
"""

import argparse
import logging
import sys

from .config import SolverConfig
from .errors import CubeError
from .solver import CubeSolver

logger = logging.getLogger("cubesolver")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cubesolver",
        description="Solve a 3x3x3 cube given its 54 stickers in U, R, F, D, L, B face order.")
    parser.add_argument("layout", help="54 sticker labels, one character each (whitespace ignored)")
    parser.add_argument("--max-length", type=int, default=None,
                        help="longest solution to accept (default: CUBESOLVER_MAX_LENGTH or 20)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log table builds and search progress")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SolverConfig.from_env()
        if args.max_length is not None:
            config = SolverConfig(max_length=args.max_length,
                                  max_phase2_length=config.max_phase2_length,
                                  max_workers=config.max_workers)
        solution = CubeSolver(config).solve(args.layout)
    except (CubeError, ValueError) as e:
        logger.debug("Rejected layout", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(" ".join(solution))
    return 0


if __name__ == "__main__":
    sys.exit(main())
