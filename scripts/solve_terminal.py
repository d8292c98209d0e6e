"""Solve a Sudoku in the terminal, animating every assignment."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

import colorama

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from newdoku.config import env_value
from newdoku.puzzles.parsing import load_puzzle_file
from newdoku.puzzles.store import DEFAULT_PUZZLE_ID, PuzzleStore
from newdoku.render.terminal import TerminalAnimator
from newdoku.solver.errors import SudokuError
from newdoku.solver.grid import Grid
from scripts._paths import DATA_PUZZLE_DIR, resolve_puzzle_path

LOGGER = logging.getLogger("solve_terminal")


@dataclass
class SolveConfig:
    step_ms: int = 0
    quiet: bool = False
    file: Optional[str] = None
    puzzle_id: Optional[str] = None
    puzzle_dir: Optional[str] = None
    max_solutions: int = 1
    color: bool = True
    debug: bool = False


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _parse_args(argv: Optional[list[str]] = None) -> SolveConfig:
    parser = argparse.ArgumentParser(description="Solve a Sudoku in the terminal")
    parser.add_argument(
        "-s",
        "--step",
        type=int,
        default=env_value("SUDOKU_STEP_MS", 0),
        help="Wait STEP millis between inserts (fallback to SUDOKU_STEP_MS env)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="No output until finished solving"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("-f", "--file", help="Load the Sudoku from a file")
    source.add_argument("--id", dest="puzzle_id", help="Load a stored puzzle by id")
    parser.add_argument(
        "--puzzle-dir",
        default=os.getenv("SUDOKU_PUZZLE_DIR", str(DATA_PUZZLE_DIR)),
        help="Directory of <id>.txt puzzles (fallback to SUDOKU_PUZZLE_DIR env)",
    )
    parser.add_argument(
        "-n",
        "--max-solutions",
        type=int,
        default=1,
        help="Solutions to collect, 0 for all of them",
    )
    parser.add_argument("--no-color", action="store_true")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    if args.max_solutions < 0:
        parser.error("--max-solutions must be >= 0")

    return SolveConfig(
        step_ms=max(0, args.step),
        quiet=args.quiet,
        file=args.file,
        puzzle_id=args.puzzle_id,
        puzzle_dir=args.puzzle_dir,
        max_solutions=args.max_solutions,
        color=not args.no_color,
        debug=args.debug,
    )


def load_grid(config: SolveConfig) -> Grid:
    """Build the puzzle grid from a file, a stored id or the default puzzle."""
    if config.file:
        return Grid(load_puzzle_file(resolve_puzzle_path(config.file)))

    store = PuzzleStore(config.puzzle_dir)
    return Grid(store.load(config.puzzle_id or DEFAULT_PUZZLE_ID))


def run_solve(config: SolveConfig, stream: Optional[TextIO] = None) -> int:
    try:
        grid = load_grid(config)
    except (SudokuError, FileNotFoundError) as exc:
        LOGGER.error("Cannot load puzzle: %s", exc)
        return 2

    animator = TerminalAnimator(
        stream=stream,
        step_ms=config.step_ms,
        quiet=config.quiet,
        color=config.color,
    )
    result = animator.play(grid, max_solutions=config.max_solutions)
    LOGGER.debug("Solve finished with %d solution(s)", result.found)
    return 0 if result.found else 1


def main(argv: Optional[list[str]] = None) -> int:
    config = _parse_args(argv)
    _configure_logging(config.debug)
    if config.color:
        colorama.just_fix_windows_console()
    return run_solve(config)


if __name__ == "__main__":
    raise SystemExit(main())
