"""Sudoku solver using naked-single propagation and backtracking."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generator, Iterator, Optional, Sequence

from .errors import ConstraintViolation
from .grid import Grid

_LOGGER = logging.getLogger(__name__)

Search = Generator["StepEvent", None, bool]


@dataclass(frozen=True)
class StepEvent:
    """One mutation of the solver's working copy; ``value`` None means cleared."""

    row: int
    col: int
    value: Optional[int]

    @property
    def cleared(self) -> bool:
        return self.value is None


class SolveResult:
    """
    Outcome of a single ``SudokuSolver.solve`` call.

    When steps were requested the search runs only as far as ``steps`` has
    been drained. Reading ``solutions`` finishes the remaining search, so a
    caller that never looks at the stream still gets the full result.
    ``close()`` abandons the search and keeps only the solutions completed
    so far.
    """

    def __init__(self, max_solutions: int):
        self.max_solutions = max_solutions
        self.nodes = 0
        self.backtracks = 0
        self._solutions: list[Grid] = []
        self._events: Optional[Iterator[StepEvent]] = None
        self._closed = False

    @property
    def steps(self) -> Iterator[StepEvent]:
        if self._events is None:
            raise RuntimeError("Step events were not requested for this solve")
        return self._events

    @property
    def solutions(self) -> list[Grid]:
        if self._events is not None and not self._closed:
            for _ in self._events:
                pass
        return list(self._solutions)

    @property
    def first(self) -> Optional[Grid]:
        solutions = self.solutions
        return solutions[0] if solutions else None

    @property
    def found(self) -> int:
        """Solutions completed so far, without advancing the search."""
        return len(self._solutions)

    @property
    def limit_reached(self) -> bool:
        return 0 < self.max_solutions <= len(self._solutions)

    def close(self) -> None:
        if self._events is not None and not self._closed:
            self._events.close()
        self._closed = True

    def __enter__(self) -> "SolveResult":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self.solutions)

    def __iter__(self) -> Iterator[Grid]:
        return iter(self.solutions)

    def _record(self, grid: Grid) -> None:
        self._solutions.append(grid.copy())


class SudokuSolver:
    """Solves Sudoku puzzles with constraint propagation and backtracking."""

    def solve(
        self, grid: Grid, max_solutions: int = 1, emit_steps: bool = False
    ) -> SolveResult:
        """
        Find up to ``max_solutions`` solutions of a puzzle.

        Args:
            grid: Puzzle to solve; it is never modified
            max_solutions: Stop after this many solutions, 0 for all of them
            emit_steps: Expose every assignment as a lazy ``StepEvent`` stream

        Returns:
            SolveResult with solutions in discovery order
        """
        if max_solutions < 0:
            raise ValueError(f"max_solutions must be >= 0, got {max_solutions}")

        result = SolveResult(max_solutions)
        result._events = self._run(grid.copy(), result)
        if not emit_steps:
            for _ in result._events:
                pass
            result._events = None
        return result

    def count_solutions(self, grid: Grid, max_count: int = 2) -> int:
        """Count solutions, stopping once ``max_count`` have been found."""
        return len(self.solve(grid, max_solutions=max_count).solutions)

    def _run(self, work: Grid, result: SolveResult) -> Generator[StepEvent, None, None]:
        if not work.is_valid():
            _LOGGER.info("Puzzle clues conflict, no solution possible")
            return
        yield from self._search(work, result)
        _LOGGER.debug(
            "Search finished: solutions=%d nodes=%d backtracks=%d",
            len(result._solutions),
            result.nodes,
            result.backtracks,
        )

    def _search(self, grid: Grid, result: SolveResult) -> Search:
        """Explore one node; returns True when the caller should stop."""
        result.nodes += 1
        forced: list[tuple[int, int]] = []

        consistent = yield from self._propagate(grid, forced)
        if consistent:
            target = self._select_cell(grid)
            if target is None:
                result._record(grid)
                if result.limit_reached:
                    return True
            else:
                row, col = target
                for value in sorted(grid.candidates_of(row, col)):
                    try:
                        grid.set(row, col, value)
                    except ConstraintViolation:
                        continue
                    yield StepEvent(row, col, value)

                    if (yield from self._search(grid, result)):
                        return True

                    grid.unset(row, col)
                    yield StepEvent(row, col, None)
                result.backtracks += 1

        for row, col in reversed(forced):
            grid.unset(row, col)
            yield StepEvent(row, col, None)
        return False

    def _propagate(self, grid: Grid, forced: list[tuple[int, int]]) -> Search:
        """Assign naked singles until none remain; False on a dead end."""
        progress = True
        while progress:
            progress = False
            for row, col in grid.empty_positions():
                candidates = grid.candidates_of(row, col)
                if not candidates:
                    return False
                if len(candidates) == 1:
                    (value,) = candidates
                    grid.set(row, col, value)
                    forced.append((row, col))
                    yield StepEvent(row, col, value)
                    progress = True
        return True

    def _select_cell(self, grid: Grid) -> Optional[tuple[int, int]]:
        """Unresolved cell with the fewest candidates, lowest index on ties."""
        best: Optional[tuple[int, int]] = None
        best_count = 10
        for row, col in grid.empty_positions():
            count = grid.candidate_count(row, col)
            if count < best_count:
                best, best_count = (row, col), count
                # Propagation leaves at least two candidates per open cell.
                if count == 2:
                    break
        return best


def solve(values: Sequence[Optional[int]]) -> Optional[Grid]:
    """Convenience function returning the first solution of 81 values."""
    return SudokuSolver().solve(Grid(values)).first


def is_unique(grid: Grid) -> bool:
    """Whether the puzzle has exactly one solution."""
    return SudokuSolver().count_solutions(grid, max_count=2) == 1
